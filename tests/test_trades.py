"""Tests for the trade lifecycle and its effect on member gold holdings."""

from datetime import datetime

import pytest
from sqlmodel import select

from gold_portfolio.models.trade import Trade, TradeStatus, TradeType
from gold_portfolio.schemas.auth import TokenPayload
from gold_portfolio.schemas.trade import TradeCreate, TradeStatusUpdate
from gold_portfolio.services import trades
from gold_portfolio.services.errors import BadRequestError, ForbiddenError, NotFoundError


def _admin_actor(admin) -> TokenPayload:
    return TokenPayload(id=admin.id, email=admin.email, role="admin", type="admin")


def _member_actor(member) -> TokenPayload:
    return TokenPayload(id=member.id, email=member.email, role="member", type="member")


# ---------------------------------------------------------------------------
# Service layer
# ---------------------------------------------------------------------------

class TestCreateTradeService:
    def test_admin_buy_completes_and_adds_holdings(self, session, admin, member, active_rate):
        trade = trades.create_trade(
            session,
            TradeCreate(member_id=member.id, trade_type=TradeType.BUY, quantity=2.5),
            _admin_actor(admin),
        )
        assert trade.status == TradeStatus.COMPLETED
        assert trade.rate_at_trade == active_rate.buy_price
        assert trade.total_amount == pytest.approx(2.5 * 6000.0)
        assert trade.gold_rate_id == active_rate.id
        assert trade.approved_by == admin.id
        session.refresh(member)
        assert member.gold_holdings == pytest.approx(12.5)

    def test_admin_can_queue_pending_trade(self, session, admin, member, active_rate):
        trade = trades.create_trade(
            session,
            TradeCreate(member_id=member.id, trade_type=TradeType.BUY, quantity=1, status=TradeStatus.PENDING),
            _admin_actor(admin),
        )
        assert trade.status == TradeStatus.PENDING
        assert trade.approved_by is None
        session.refresh(member)
        assert member.gold_holdings == pytest.approx(10.0)

    def test_member_sell_is_pending_at_sell_price(self, session, member, active_rate):
        trade = trades.create_trade(
            session,
            TradeCreate(trade_type=TradeType.SELL, quantity=3),
            _member_actor(member),
        )
        assert trade.status == TradeStatus.PENDING
        assert trade.member_id == member.id
        assert trade.rate_at_trade == active_rate.sell_price
        assert trade.initiated_by_type == "member"
        session.refresh(member)
        assert member.gold_holdings == pytest.approx(10.0)

    def test_member_buy_forbidden(self, session, member, active_rate):
        with pytest.raises(ForbiddenError):
            trades.create_trade(
                session, TradeCreate(trade_type=TradeType.BUY, quantity=1), _member_actor(member)
            )
        assert session.exec(select(Trade)).all() == []

    def test_member_cannot_trade_for_someone_else(self, session, member, make_member, active_rate):
        other = make_member(email_addr="other@example.com", gold_holdings=5)
        with pytest.raises(ForbiddenError):
            trades.create_trade(
                session,
                TradeCreate(member_id=other.id, trade_type=TradeType.SELL, quantity=1),
                _member_actor(member),
            )

    def test_sell_more_than_holdings_rejected(self, session, admin, member, active_rate):
        with pytest.raises(BadRequestError, match="Insufficient gold holdings"):
            trades.create_trade(
                session,
                TradeCreate(member_id=member.id, trade_type=TradeType.SELL, quantity=10.5),
                _admin_actor(admin),
            )
        session.refresh(member)
        assert member.gold_holdings == pytest.approx(10.0)

    def test_no_active_rate(self, session, admin, member):
        with pytest.raises(NotFoundError):
            trades.create_trade(
                session,
                TradeCreate(member_id=member.id, trade_type=TradeType.BUY, quantity=1),
                _admin_actor(admin),
            )

    def test_inactive_member_rejected(self, session, admin, make_member, active_rate):
        inactive = make_member(email_addr="gone@example.com", is_active=False)
        with pytest.raises(BadRequestError):
            trades.create_trade(
                session,
                TradeCreate(member_id=inactive.id, trade_type=TradeType.BUY, quantity=1),
                _admin_actor(admin),
            )

    def test_admin_must_name_member(self, session, admin, active_rate):
        with pytest.raises(BadRequestError):
            trades.create_trade(
                session, TradeCreate(trade_type=TradeType.BUY, quantity=1), _admin_actor(admin)
            )


class TestApproval:
    def _pending(self, session, admin, member, trade_type, quantity):
        return trades.create_trade(
            session,
            TradeCreate(
                member_id=member.id, trade_type=trade_type, quantity=quantity, status=TradeStatus.PENDING
            ),
            _admin_actor(admin),
        )

    def test_approving_pending_buy_adds_holdings(self, client, session, admin, admin_headers, member, active_rate):
        trade = self._pending(session, admin, member, TradeType.BUY, 4)
        resp = client.patch(
            f"/api/trades/{trade.id}/status", json={"status": "COMPLETED"}, headers=admin_headers
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "COMPLETED"
        assert resp.json()["data"]["approvedBy"] == admin.id
        session.refresh(member)
        assert member.gold_holdings == pytest.approx(14.0)

    def test_approving_pending_sell_subtracts_holdings(self, client, session, admin, admin_headers, member, active_rate):
        trade = self._pending(session, admin, member, TradeType.SELL, 4)
        resp = client.patch(
            f"/api/trades/{trade.id}/status", json={"status": "COMPLETED"}, headers=admin_headers
        )
        assert resp.status_code == 200
        session.refresh(member)
        assert member.gold_holdings == pytest.approx(6.0)

    def test_rejecting_leaves_holdings(self, client, session, admin, admin_headers, member, active_rate):
        trade = self._pending(session, admin, member, TradeType.SELL, 4)
        resp = client.patch(
            f"/api/trades/{trade.id}/status",
            json={"status": "CANCELLED", "notes": "price moved"},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["notes"] == "price moved"
        session.refresh(member)
        assert member.gold_holdings == pytest.approx(10.0)

    def test_approving_sell_rechecks_holdings(self, session, admin, member, active_rate):
        trade = self._pending(session, admin, member, TradeType.SELL, 8)
        member.gold_holdings = 5.0
        session.add(member)
        session.commit()
        with pytest.raises(BadRequestError, match="Insufficient gold holdings"):
            trades.update_trade_status(
                session, trade.id, TradeStatusUpdate(status=TradeStatus.COMPLETED), admin.id
            )
        session.refresh(trade)
        assert trade.status == TradeStatus.PENDING

    def test_completed_trade_is_final(self, client, session, admin, admin_headers, member, active_rate):
        trade = self._pending(session, admin, member, TradeType.BUY, 1)
        client.patch(f"/api/trades/{trade.id}/status", json={"status": "COMPLETED"}, headers=admin_headers)
        resp = client.patch(
            f"/api/trades/{trade.id}/status", json={"status": "CANCELLED"}, headers=admin_headers
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "Cannot modify completed trade"
        session.refresh(member)
        assert member.gold_holdings == pytest.approx(11.0)

    def test_member_cannot_approve(self, client, session, admin, member, member_headers, active_rate):
        trade = self._pending(session, admin, member, TradeType.BUY, 1)
        resp = client.patch(
            f"/api/trades/{trade.id}/status", json={"status": "COMPLETED"}, headers=member_headers
        )
        assert resp.status_code == 403


class TestCancel:
    def _completed_buy(self, session, admin, member, quantity=3):
        return trades.create_trade(
            session,
            TradeCreate(member_id=member.id, trade_type=TradeType.BUY, quantity=quantity),
            _admin_actor(admin),
        )

    def test_cancel_reverses_exactly_once(self, client, session, admin, admin_headers, member, active_rate):
        trade = self._completed_buy(session, admin, member)
        session.refresh(member)
        assert member.gold_holdings == pytest.approx(13.0)

        resp = client.delete(f"/api/trades/{trade.id}/cancel", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "CANCELLED"
        session.refresh(member)
        assert member.gold_holdings == pytest.approx(10.0)

        again = client.delete(f"/api/trades/{trade.id}/cancel", headers=admin_headers)
        assert again.status_code == 400
        session.refresh(member)
        assert member.gold_holdings == pytest.approx(10.0)

    def test_cancel_fails_when_gold_already_sold(self, session, admin, member, active_rate):
        trade = self._completed_buy(session, admin, member, quantity=3)
        trades.create_trade(
            session,
            TradeCreate(member_id=member.id, trade_type=TradeType.SELL, quantity=12),
            _admin_actor(admin),
        )
        with pytest.raises(BadRequestError, match="Cannot cancel"):
            trades.cancel_trade(session, trade.id, admin.id)
        session.refresh(trade)
        assert trade.status == TradeStatus.COMPLETED

    def test_sell_trades_cannot_be_cancelled(self, session, admin, member, active_rate):
        trade = trades.create_trade(
            session,
            TradeCreate(member_id=member.id, trade_type=TradeType.SELL, quantity=1),
            _admin_actor(admin),
        )
        with pytest.raises(BadRequestError, match="Only BUY trades"):
            trades.cancel_trade(session, trade.id, admin.id)

    def test_fractional_buys_cancel_back_to_zero(self, session, admin, make_member, active_rate):
        owner = make_member(email_addr="fraction@example.com", gold_holdings=0.0)
        first = self._completed_buy(session, admin, owner, quantity=0.7)
        second = self._completed_buy(session, admin, owner, quantity=0.1)
        session.refresh(owner)
        assert owner.gold_holdings == 0.8

        trades.cancel_trade(session, first.id, admin.id)
        session.refresh(owner)
        assert owner.gold_holdings == 0.1

        trades.cancel_trade(session, second.id, admin.id)
        session.refresh(owner)
        assert owner.gold_holdings == 0.0

    def test_missing_trade(self, client, admin_headers):
        resp = client.delete("/api/trades/999/cancel", headers=admin_headers)
        assert resp.status_code == 404


# ---------------------------------------------------------------------------
# API layer
# ---------------------------------------------------------------------------

class TestTradeApi:
    def test_member_sell_request(self, client, member_headers, member, active_rate):
        resp = client.post(
            "/api/trades", json={"tradeType": "SELL", "quantity": 2}, headers=member_headers
        )
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["status"] == "PENDING"
        assert data["memberId"] == member.id
        assert data["rateAtTrade"] == 6100.0

    def test_member_buy_is_forbidden_over_http(self, client, member_headers, active_rate):
        resp = client.post(
            "/api/trades", json={"tradeType": "BUY", "quantity": 2}, headers=member_headers
        )
        assert resp.status_code == 403
        assert resp.json()["success"] is False

    def test_quantity_below_minimum(self, client, admin_headers, member, active_rate):
        resp = client.post(
            "/api/trades",
            json={"memberId": member.id, "tradeType": "BUY", "quantity": 0.0001},
            headers=admin_headers,
        )
        assert resp.status_code == 400

    def test_my_trades_only_lists_own(self, client, session, admin, member, make_member, member_headers, active_rate):
        other = make_member(email_addr="other@example.com", gold_holdings=5)
        for target in (member, other):
            trades.create_trade(
                session,
                TradeCreate(member_id=target.id, trade_type=TradeType.BUY, quantity=1),
                _admin_actor(admin),
            )
        resp = client.get("/api/trades/my-trades", headers=member_headers)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["pagination"]["limit"] == 100
        assert [t["memberId"] for t in data["items"]] == [member.id]

    def test_admin_list_filters(self, client, session, admin, admin_headers, member, active_rate):
        for trade_type in (TradeType.BUY, TradeType.SELL, TradeType.BUY):
            trades.create_trade(
                session,
                TradeCreate(member_id=member.id, trade_type=trade_type, quantity=1),
                _admin_actor(admin),
            )
        resp = client.get("/api/trades?tradeType=BUY", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["pagination"]["total"] == 2

    def test_statistics(self, client, session, admin, admin_headers, member, active_rate):
        trades.create_trade(
            session,
            TradeCreate(member_id=member.id, trade_type=TradeType.BUY, quantity=2),
            _admin_actor(admin),
        )
        trades.create_trade(
            session,
            TradeCreate(member_id=member.id, trade_type=TradeType.SELL, quantity=1, status=TradeStatus.PENDING),
            _admin_actor(admin),
        )
        resp = client.get(f"/api/trades/statistics?memberId={member.id}", headers=admin_headers)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["totalTrades"] == 2
        assert data["pendingTrades"] == 1
        assert data["buyVolume"]["totalQuantity"] == pytest.approx(2.0)
        assert data["sellVolume"]["totalQuantity"] == pytest.approx(0.0)

    def test_date_range_is_inclusive(self, client, session, admin, admin_headers, member, active_rate):
        days = [datetime(2024, 1, d) for d in (1, 2, 3, 4)]
        for day in days:
            trade = trades.create_trade(
                session,
                TradeCreate(member_id=member.id, trade_type=TradeType.BUY, quantity=1),
                _admin_actor(admin),
            )
            trade.created_at = day
            session.add(trade)
            session.commit()

        resp = client.get(
            "/api/trades?startDate=2024-01-02T00:00:00&endDate=2024-01-03T00:00:00&sortOrder=asc",
            headers=admin_headers,
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["pagination"]["total"] == 2
        assert [t["createdAt"][:10] for t in data["items"]] == ["2024-01-02", "2024-01-03"]

    def test_infinite_quantity_rejected(self, client, session, admin_headers, member, active_rate):
        resp = client.post(
            "/api/trades",
            content='{"memberId": %d, "tradeType": "BUY", "quantity": Infinity}' % member.id,
            headers={**admin_headers, "Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        session.refresh(member)
        assert member.gold_holdings == pytest.approx(10.0)
        assert session.exec(select(Trade)).all() == []

    def test_member_cannot_list_all_trades(self, client, member_headers):
        resp = client.get("/api/trades", headers=member_headers)
        assert resp.status_code == 403
