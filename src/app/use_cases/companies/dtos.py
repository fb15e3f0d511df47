from datetime import datetime
from typing import List, Optional

from src.app.use_cases.auth.dtos import CamelModel


class CompanyResponse(CamelModel):
    company_id: str
    name: str
    email: str
    phone: Optional[str] = None
    abn: Optional[str] = None
    subscription_tier: str
    is_active: bool
    trial_ends_at: Optional[datetime] = None


class CompanyUser(CamelModel):
    user_id: str
    email: str
    first_name: str
    last_name: str
    role: str
    employee_id: Optional[str] = None
    is_active: bool
    last_login_at: Optional[datetime] = None


class CompanyUsersResponse(CamelModel):
    users: List[CompanyUser]
