"""
Repositories for board and sprint membership in the project tracker.

Both entities are keyed by the pair (parent id, user_id).
"""

from typing import Iterable, List, Optional

from tenantdb.models import MomentumBoardMember, MomentumSprintMember
from tenantdb.repositories.base import BaseRepository, Relation

USER_SUMMARY = ("email", "display_name", "avatar_url")


class MomentumBoardMemberRepository(BaseRepository[MomentumBoardMember]):
    model = MomentumBoardMember
    key = ("board_id", "user_id")
    label = "board member"
    relations = {
        "board": Relation("board", ("name", "type", "project_id")),
        "user": Relation("user", USER_SUMMARY),
    }
    filter_fields = ("board_id", "user_id", "is_active", "ended_at")

    async def find_many_by_board(
        self,
        board_id: str,
        include: Optional[Iterable[str]] = ()
    ) -> List[MomentumBoardMember]:
        """Get the members of a board, oldest membership first."""
        return await self.find_all(filters={"board_id": board_id}, order_by="created_at", include=include)


class MomentumSprintMemberRepository(BaseRepository[MomentumSprintMember]):
    model = MomentumSprintMember
    key = ("sprint_id", "user_id")
    label = "sprint member"
    relations = {
        "sprint": Relation("sprint", ("title", "status", "start_date", "end_date")),
        "user": Relation("user", USER_SUMMARY),
    }
    filter_fields = ("sprint_id", "user_id", "is_active")
    sort_fields = ("capacity_hours", "created_at")

    async def find_many_by_sprint(
        self,
        sprint_id: str,
        include: Optional[Iterable[str]] = ()
    ) -> List[MomentumSprintMember]:
        """Get the members of a sprint, oldest membership first."""
        return await self.find_all(filters={"sprint_id": sprint_id}, order_by="created_at", include=include)
