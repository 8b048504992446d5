from .company import CompanyRepository
from .qualification import QualificationRepository
from .outreach import OutreachRepository

__all__ = ['CompanyRepository', 'QualificationRepository', 'OutreachRepository']
