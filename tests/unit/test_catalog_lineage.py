"""FetchLineage 状态机测试。"""

from src.modules.catalog.application.lineage import FetchLineage, LineageState


class TestFetchLineage:
    """谱系 token 与状态迁移。"""

    def test_starts_idle(self):
        lineage = FetchLineage("limit")

        assert lineage.state == LineageState.IDLE
        assert lineage.in_flight is False
        assert lineage.token == 0

    def test_begin_issues_increasing_tokens(self):
        lineage = FetchLineage("limit")

        first = lineage.begin(trigger=20)
        second = lineage.begin(trigger=40)

        assert (first.token, second.token) == (1, 2)
        assert first.state == LineageState.SUPERSEDED
        assert second.state == LineageState.FETCHING
        assert lineage.is_current(second)
        assert lineage.in_flight is True

    def test_settle_current_ticket(self):
        lineage = FetchLineage("category")
        ticket = lineage.begin(trigger="fire")

        assert lineage.settle(ticket) is True
        assert ticket.state == LineageState.SETTLED
        assert lineage.state == LineageState.SETTLED
        assert lineage.in_flight is False

    def test_settle_stale_ticket_keeps_newer_in_flight(self):
        lineage = FetchLineage("limit")
        stale = lineage.begin(trigger=20)
        lineage.begin(trigger=40)

        assert lineage.settle(stale) is False
        assert stale.state == LineageState.SUPERSEDED
        assert lineage.in_flight is True

    def test_stale_ticket_after_newer_settled(self):
        lineage = FetchLineage("limit")
        stale = lineage.begin(trigger=20)
        fresh = lineage.begin(trigger=40)

        assert lineage.settle(fresh) is True
        assert lineage.settle(stale) is False
        assert lineage.state == LineageState.SETTLED

    def test_supersede_in_flight_request(self):
        lineage = FetchLineage("category")
        ticket = lineage.begin(trigger="fire")

        assert lineage.supersede() is ticket
        assert ticket.state == LineageState.SUPERSEDED
        assert lineage.state == LineageState.SUPERSEDED
        assert lineage.in_flight is False
        assert lineage.settle(ticket) is False

    def test_supersede_when_idle_returns_none(self):
        lineage = FetchLineage("category")
        ticket = lineage.begin(trigger="fire")
        lineage.settle(ticket)

        assert lineage.supersede() is None
        assert lineage.state == LineageState.SETTLED

    def test_authoritative_flag_recorded_on_ticket(self):
        lineage = FetchLineage("limit")

        ticket = lineage.begin(trigger=40, authoritative=False)

        assert ticket.authoritative is False
        assert ticket.lineage == "limit"
        assert ticket.trigger == 40
