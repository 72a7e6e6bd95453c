"""
HR models: employees, their leave requests and salary records.
"""

from sqlalchemy import Boolean, Column, Date, Numeric, String, Text
from sqlalchemy.orm import relationship

from tenantdb.models.base import Base, TimestampMixin, fk_column, id_column


class Employee(TimestampMixin, Base):
    __tablename__ = "employees"

    id = id_column()
    user_id = fk_column("users.id", nullable=True, unique=True)
    manager_id = fk_column("employees.id", nullable=True)
    job_title = Column(String(255), nullable=False)
    department = Column(String(128), nullable=False)
    cost_centre = Column(String(64), nullable=False)
    start_date = Column(Date, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    user = relationship("UserMain")


class Leave(TimestampMixin, Base):
    __tablename__ = "leaves"

    id = id_column()
    employee_id = fk_column("employees.id", ondelete="CASCADE")
    leave_type = Column(String(32), nullable=False)
    status = Column(String(32), nullable=False, default="PENDING")
    reason = Column(Text)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    employee = relationship("Employee")


class Salary(TimestampMixin, Base):
    __tablename__ = "salaries"

    id = id_column()
    employee_id = fk_column("employees.id", ondelete="CASCADE")
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    pay_frequency = Column(String(16), nullable=False, default="MONTHLY")
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)
    is_active = Column(Boolean, default=True, nullable=False)

    employee = relationship("Employee")
