from datetime import datetime
from typing import Optional, List

from sqlalchemy import (
    create_engine, String, Integer, DateTime, Boolean, Text, ForeignKey, Index
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship, sessionmaker

from config import DB_URL
from models.enums import CompanyStatus, OutreachStatus, FollowupStatus


class Base(DeclarativeBase):
    pass


class Company(Base):
    """Candidate sponsor company"""
    __tablename__ = 'companies'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    wikipedia_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    website_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    region: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=CompanyStatus.UNQUALIFIED.value)
    qualification_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    signals: Mapped[List["SponsorshipSignal"]] = relationship(
        "SponsorshipSignal", back_populates="company", cascade="all, delete-orphan"
    )
    contact_paths: Mapped[List["ContactPath"]] = relationship(
        "ContactPath", back_populates="company", cascade="all, delete-orphan"
    )
    people: Mapped[List["PersonRecord"]] = relationship(
        "PersonRecord", back_populates="company", cascade="all, delete-orphan"
    )
    outreach: Mapped[List["Outreach"]] = relationship(
        "Outreach", back_populates="company", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index('idx_companies_status', 'status'),
        Index('idx_companies_category', 'category'),
        Index('idx_companies_score', 'qualification_score'),
    )

    def __repr__(self):
        return f"<Company(id={self.id}, name='{self.name}', status='{self.status}')>"


class SponsorshipSignal(Base):
    """Detected indicator of sponsorship fit"""
    __tablename__ = 'sponsorship_signals'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(Integer, ForeignKey('companies.id'), nullable=False)
    signal_type: Mapped[str] = mapped_column(String(50), nullable=False)
    signal_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    weight: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    source_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    company: Mapped["Company"] = relationship("Company", back_populates="signals")

    __table_args__ = (
        Index('idx_signals_company', 'company_id'),
    )

    def __repr__(self):
        return f"<SponsorshipSignal(id={self.id}, type='{self.signal_type}')>"


class ContactPath(Base):
    """A way to reach the company (email, form, agency)"""
    __tablename__ = 'contact_paths'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(Integer, ForeignKey('companies.id'), nullable=False)
    path_type: Mapped[str] = mapped_column(String(20), nullable=False)  # "email", "form", "agency", "press"
    value: Mapped[str] = mapped_column(Text, nullable=False)
    email_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    confidence_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    source_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    company: Mapped["Company"] = relationship("Company", back_populates="contact_paths")

    __table_args__ = (
        Index('idx_contact_paths_company', 'company_id'),
    )

    def __repr__(self):
        return f"<ContactPath(id={self.id}, type='{self.path_type}', value='{self.value}')>"


class PersonRecord(Base):
    """Decision maker at a company"""
    __tablename__ = 'people'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(Integer, ForeignKey('companies.id'), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    job_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    department: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    source_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    search_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    company: Mapped["Company"] = relationship("Company", back_populates="people")

    __table_args__ = (
        Index('idx_people_company', 'company_id'),
    )

    def __repr__(self):
        return f"<PersonRecord(id={self.id}, name='{self.name}')>"


class Outreach(Base):
    """Generated sponsorship message"""
    __tablename__ = 'outreach'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(Integer, ForeignKey('companies.id'), nullable=False)
    contact_path_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey('contact_paths.id', ondelete='SET NULL'), nullable=True
    )
    person_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey('people.id', ondelete='SET NULL'), nullable=True
    )
    subject: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    body: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=OutreachStatus.DRAFT.value)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    company: Mapped["Company"] = relationship("Company", back_populates="outreach")
    followups: Mapped[List["Followup"]] = relationship(
        "Followup", back_populates="outreach", cascade="all, delete-orphan",
        order_by="Followup.day_offset"
    )

    __table_args__ = (
        Index('idx_outreach_company', 'company_id'),
    )

    def __repr__(self):
        return f"<Outreach(id={self.id}, subject='{(self.subject or '')[:40]}')>"


class Followup(Base):
    """Follow-up message in an outreach sequence"""
    __tablename__ = 'followups'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    outreach_id: Mapped[int] = mapped_column(Integer, ForeignKey('outreach.id'), nullable=False)
    day_offset: Mapped[int] = mapped_column(Integer, nullable=False)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=FollowupStatus.PENDING.value)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    outreach: Mapped["Outreach"] = relationship("Outreach", back_populates="followups")

    __table_args__ = (
        Index('idx_followups_outreach', 'outreach_id'),
    )

    def __repr__(self):
        return f"<Followup(id={self.id}, day_offset={self.day_offset})>"


def make_engine(db_url: str = DB_URL):
    """Create a database engine"""
    return create_engine(db_url, echo=False)


def make_session_factory(db_url: str = DB_URL, engine=None):
    """Session factory bound to its own engine; pass it to repositories and workflows"""
    return sessionmaker(bind=engine or make_engine(db_url), expire_on_commit=False)


def init_db(engine):
    """Create all tables"""
    Base.metadata.create_all(engine)
