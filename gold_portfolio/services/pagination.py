"""Offset pagination over a SQLModel table."""

import math
from typing import Any

from sqlmodel import Session, SQLModel, func, select

from gold_portfolio.schemas.common import Page, PageParams, Pagination
from gold_portfolio.services.errors import BadRequestError


def paginate(
    session: Session,
    model: type[SQLModel],
    params: PageParams,
    sort_fields: dict[str, str],
    read_schema: Any,
    filters: tuple = (),
) -> Page:
    """Return one page of `model` rows matching `filters`, as `read_schema` items.

    `sort_fields` maps the camelCase sort keys accepted from clients to column names.
    """
    column_name = sort_fields.get(params.sort_by)
    if column_name is None:
        allowed = ", ".join(sort_fields)
        raise BadRequestError(f"sortBy must be one of: {allowed}")

    column = getattr(model, column_name)
    order = column.asc() if params.sort_order == "asc" else column.desc()

    total = session.exec(select(func.count()).select_from(model).where(*filters)).one()
    rows = session.exec(
        select(model)
        .where(*filters)
        .order_by(order, model.id.desc())
        .offset((params.page - 1) * params.limit)
        .limit(params.limit)
    ).all()

    return Page[read_schema](
        items=[read_schema.model_validate(row) for row in rows],
        pagination=Pagination(
            page=params.page,
            limit=params.limit,
            total=total,
            pages=math.ceil(total / params.limit),
        ),
    )
