"""
This package contains the repository classes for database access.
"""

from tenantdb.repositories.base import BaseRepository, Relation
from tenantdb.repositories.companies import (
    CompanyAddonRepository,
    CompanyBillingRepository,
    CompanyMainRepository,
    CompanyPlanRepository,
    CompanySettingRepository,
    CompanySubscriptionRepository,
    CompanyUserRepository,
)
from tenantdb.repositories.crm import (
    CrmCompanyContactRepository,
    CrmFeedbackRepository,
    CrmMessageRepository,
    CrmTicketRepository,
)
from tenantdb.repositories.finance import (
    FinanceCostRepository,
    FinanceInvoiceRepository,
    FinanceSupplierRepository,
)
from tenantdb.repositories.marketing import (
    AdContentRepository,
    AdSetRepository,
    CampaignRepository,
    EmailCampaignRepository,
    LeadRepository,
    MarketingAnalyticRepository,
    PaidCampaignRepository,
    PerformanceMetricRepository,
    SocialPostRepository,
)
from tenantdb.repositories.momentum import MomentumBoardMemberRepository, MomentumSprintMemberRepository
from tenantdb.repositories.people import EmployeeRepository, LeaveRepository, SalaryRepository
from tenantdb.repositories.users import (
    UserActivityRepository,
    UserAddonRepository,
    UserBillingRepository,
    UserMainRepository,
    UserPlanRepository,
    UserSessionRepository,
    UserSettingsRepository,
    UserSubscriptionRepository,
)

__all__ = [
    'BaseRepository', 'Relation',
    'CompanyAddonRepository', 'CompanyBillingRepository', 'CompanyMainRepository',
    'CompanyPlanRepository', 'CompanySettingRepository', 'CompanySubscriptionRepository',
    'CompanyUserRepository',
    'CrmCompanyContactRepository', 'CrmFeedbackRepository', 'CrmMessageRepository',
    'CrmTicketRepository',
    'FinanceCostRepository', 'FinanceInvoiceRepository', 'FinanceSupplierRepository',
    'AdContentRepository', 'AdSetRepository', 'CampaignRepository', 'EmailCampaignRepository',
    'LeadRepository', 'MarketingAnalyticRepository', 'PaidCampaignRepository',
    'PerformanceMetricRepository', 'SocialPostRepository',
    'MomentumBoardMemberRepository', 'MomentumSprintMemberRepository',
    'EmployeeRepository', 'LeaveRepository', 'SalaryRepository',
    'UserActivityRepository', 'UserAddonRepository', 'UserBillingRepository',
    'UserMainRepository', 'UserPlanRepository', 'UserSessionRepository',
    'UserSettingsRepository', 'UserSubscriptionRepository',
]
