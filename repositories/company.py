from typing import List, Optional
from models.database import Company
from models.enums import CompanyStatus
from .base import BaseRepository

class CompanyRepository(BaseRepository):
    """Company data operations"""

    # Queries
    get = lambda self, company_id: self.session.query(Company).filter_by(id=company_id).first()
    get_by_name = lambda self, name: self.session.query(Company).filter(Company.name.ilike(name)).first()

    get_unqualified = lambda self, limit=10: (
        self.session.query(Company)
        .filter_by(status=CompanyStatus.UNQUALIFIED.value)
        .order_by(Company.id)
        .limit(limit)
        .all()
    )

    get_qualified = lambda self: (
        self.session.query(Company)
        .filter_by(status=CompanyStatus.QUALIFIED.value)
        .order_by(Company.qualification_score.desc())
        .all()
    )

    def add(self, name: str, website_url: Optional[str] = None, wikipedia_url: Optional[str] = None,
            category: Optional[str] = None, region: Optional[str] = None) -> Company:
        """Create company and flush to get ID"""
        company = Company(name=name, website_url=website_url, wikipedia_url=wikipedia_url,
                          category=category, region=region)
        self.session.add(company)
        self.session.flush()
        return company

    def update_qualification(self, company: Company, score: int, threshold: int) -> Company:
        """Store the raw score and derive qualified/unqualified from the threshold"""
        company.qualification_score = score
        company.status = (CompanyStatus.QUALIFIED.value if score >= threshold
                          else CompanyStatus.UNQUALIFIED.value)
        return company

    def top_qualified(self, count: int) -> List[Company]:
        """Highest scoring qualified companies"""
        return self.get_qualified()[:count]
