"""
This package contains the database models for the application.

Importing it registers every mapped class on ``Base.metadata`` so that
string-based relationships resolve and ``create_all`` sees every table.
"""

from tenantdb.models.base import Base
from tenantdb.models.companies import (
    CompanyAddon,
    CompanyBilling,
    CompanyMain,
    CompanyPlan,
    CompanySetting,
    CompanySubscription,
    CompanyUser,
)
from tenantdb.models.crm import CrmCompanyContact, CrmFeedback, CrmMessage, CrmTicket
from tenantdb.models.finance import FinanceCost, FinanceInvoice, FinanceSupplier
from tenantdb.models.marketing import (
    AdContent,
    AdSet,
    Campaign,
    EmailCampaign,
    Lead,
    MarketingAnalytic,
    PaidCampaign,
    PerformanceMetric,
    SocialPost,
)
from tenantdb.models.momentum import (
    MomentumBoard,
    MomentumBoardMember,
    MomentumProject,
    MomentumSprint,
    MomentumSprintMember,
)
from tenantdb.models.people import Employee, Leave, Salary
from tenantdb.models.users import (
    UserActivity,
    UserAddon,
    UserBilling,
    UserMain,
    UserPlan,
    UserSession,
    UserSettings,
    UserSubscription,
)

__all__ = [
    'Base',
    'CompanyAddon', 'CompanyBilling', 'CompanyMain', 'CompanyPlan',
    'CompanySetting', 'CompanySubscription', 'CompanyUser',
    'CrmCompanyContact', 'CrmFeedback', 'CrmMessage', 'CrmTicket',
    'FinanceCost', 'FinanceInvoice', 'FinanceSupplier',
    'AdContent', 'AdSet', 'Campaign', 'EmailCampaign', 'Lead',
    'MarketingAnalytic', 'PaidCampaign', 'PerformanceMetric', 'SocialPost',
    'MomentumBoard', 'MomentumBoardMember', 'MomentumProject',
    'MomentumSprint', 'MomentumSprintMember',
    'Employee', 'Leave', 'Salary',
    'UserActivity', 'UserAddon', 'UserBilling', 'UserMain', 'UserPlan',
    'UserSession', 'UserSettings', 'UserSubscription',
]
