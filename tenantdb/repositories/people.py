"""
Repositories for employees, leave requests and salaries.
"""

from tenantdb.models import Employee, Leave, Salary
from tenantdb.repositories.base import BaseRepository, Relation

EMPLOYEE_SUMMARY = ("job_title", "department", "user_id")


class EmployeeRepository(BaseRepository[Employee]):
    model = Employee
    label = "employee"
    relations = {"user": Relation("user", ("email", "display_name"))}
    filter_fields = ("user_id", "manager_id", "department", "cost_centre", "is_active", "start_date")
    sort_fields = ("job_title", "department", "start_date", "created_at")


class LeaveRepository(BaseRepository[Leave]):
    model = Leave
    label = "leave"
    relations = {
        "employee": Relation("employee", EMPLOYEE_SUMMARY, (Relation("user", ("email", "display_name")),)),
    }
    filter_fields = ("employee_id", "leave_type", "status", "is_active", "start_date", "end_date")
    sort_fields = ("start_date", "end_date", "created_at")


class SalaryRepository(BaseRepository[Salary]):
    model = Salary
    label = "salary"
    relations = {"employee": Relation("employee", EMPLOYEE_SUMMARY)}
    filter_fields = ("employee_id", "currency", "pay_frequency", "is_active", "start_date", "end_date", "amount")
    sort_fields = ("start_date", "amount", "created_at")
