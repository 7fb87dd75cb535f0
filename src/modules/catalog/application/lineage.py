"""Per-input fetch lineages.

每个编排输入（limit / category）对应一条独立的抓取谱系。每次输入变化都会
签发一个单调递增的 token；响应到达时只有 token 仍为当前值才允许提交，
否则视为已被取代（Superseded），结果被静默丢弃。

状态机：Idle → Fetching → {Settled, Superseded}
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class LineageState(str, Enum):
    """谱系 / 请求状态。"""

    IDLE = "idle"
    FETCHING = "fetching"
    SETTLED = "settled"
    SUPERSEDED = "superseded"


@dataclass
class FetchTicket:
    """一次已发出的请求。"""

    lineage: str
    token: int
    trigger: Any
    # 请求发起时该谱系是否为当前视图模式
    authoritative: bool = True
    state: LineageState = field(default=LineageState.FETCHING)


class FetchLineage:
    """Issue request tokens for one input and decide which response may commit."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.token = 0
        self.state = LineageState.IDLE
        self._current: FetchTicket | None = None

    @property
    def in_flight(self) -> bool:
        return self.state == LineageState.FETCHING

    def begin(self, trigger: Any, authoritative: bool = True) -> FetchTicket:
        """Start a new request, superseding any outstanding one."""
        self._mark_superseded()
        self.token += 1
        ticket = FetchTicket(
            lineage=self.name,
            token=self.token,
            trigger=trigger,
            authoritative=authoritative,
        )
        self._current = ticket
        self.state = LineageState.FETCHING
        return ticket

    def supersede(self) -> FetchTicket | None:
        """Invalidate the outstanding request without issuing a new one."""
        ticket = self._current if self.in_flight else None
        self._mark_superseded()
        self.token += 1
        self._current = None
        if ticket is not None:
            self.state = LineageState.SUPERSEDED
        return ticket

    def is_current(self, ticket: FetchTicket) -> bool:
        return ticket.token == self.token

    def settle(self, ticket: FetchTicket) -> bool:
        """Mark a response as arrived; True when it may be committed."""
        if not self.is_current(ticket):
            ticket.state = LineageState.SUPERSEDED
            return False
        ticket.state = LineageState.SETTLED
        self.state = LineageState.SETTLED
        return True

    def _mark_superseded(self) -> None:
        if self._current is not None and self._current.state == LineageState.FETCHING:
            self._current.state = LineageState.SUPERSEDED
