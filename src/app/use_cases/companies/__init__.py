"""
Company Use Cases

Company-scoped reads behind the same-company gate.
"""

from .get_company_use_case import GetCompanyUseCase
from .list_company_users_use_case import ListCompanyUsersUseCase
from .dtos import CompanyResponse, CompanyUser, CompanyUsersResponse
