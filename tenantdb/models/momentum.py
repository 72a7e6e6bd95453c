"""
Momentum (project tracking) models needed by the membership repositories:
projects, boards, sprints and the board/sprint membership junctions.
"""

from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from tenantdb.models.base import ID_LENGTH, Base, TimestampMixin, UTCDateTime, fk_column, id_column


class MomentumProject(TimestampMixin, Base):
    __tablename__ = "momentum_projects"

    id = id_column()
    company_id = fk_column("companies.id", ondelete="CASCADE")
    name = Column(String(255), nullable=False)
    key = Column(String(16), nullable=False)
    description = Column(Text)

    company = relationship("CompanyMain", back_populates="projects")


class MomentumBoard(TimestampMixin, Base):
    __tablename__ = "momentum_boards"

    id = id_column()
    project_id = fk_column("momentum_projects.id", ondelete="CASCADE")
    name = Column(String(255), nullable=False)
    type = Column(String(32), nullable=False, default="KANBAN")

    project = relationship("MomentumProject")
    members = relationship("MomentumBoardMember", back_populates="board", passive_deletes=True)


class MomentumSprint(TimestampMixin, Base):
    __tablename__ = "momentum_sprints"

    id = id_column()
    project_id = fk_column("momentum_projects.id", ondelete="CASCADE")
    title = Column(String(255), nullable=False)
    goal = Column(Text)
    status = Column(String(32), nullable=False, default="PLANNED")
    start_date = Column(Date)
    end_date = Column(Date)

    project = relationship("MomentumProject")
    members = relationship("MomentumSprintMember", back_populates="sprint", passive_deletes=True)


class MomentumBoardMember(TimestampMixin, Base):
    """Membership of a user on a board, one row per (board, user) pair."""
    __tablename__ = "momentum_board_members"

    board_id = Column(String(ID_LENGTH), ForeignKey("momentum_boards.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    is_active = Column(Boolean, default=True, nullable=False)
    ended_at = Column(UTCDateTime())

    board = relationship("MomentumBoard", back_populates="members")
    user = relationship("UserMain")


class MomentumSprintMember(TimestampMixin, Base):
    """Membership of a user in a sprint, one row per (sprint, user) pair."""
    __tablename__ = "momentum_sprint_members"

    sprint_id = Column(String(ID_LENGTH), ForeignKey("momentum_sprints.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    capacity_hours = Column(Integer)
    is_active = Column(Boolean, default=True, nullable=False)

    sprint = relationship("MomentumSprint", back_populates="members")
    user = relationship("UserMain")
