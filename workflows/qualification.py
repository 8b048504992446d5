from typing import Dict, List, Optional

from config import QUALIFICATION_THRESHOLD, DEBUG_LOGS
from repositories import CompanyRepository, QualificationRepository
from tasks.contacts import ContactExtractor
from tasks.crawler import Crawler, InvalidUrlError
from tasks.fetcher import Fetcher
from tasks.path_selection import PathSelector
from tasks.people import PeopleExtractor, WikipediaBiographySource, merge_people
from tasks.signals import SignalAnalyzer
from tasks.summary import build_summary, error_summary
from utils.debug_logger import get_logger
from utils.rate_limiter import RateLimiter
from utils.workflow_observer import ConsoleObserver


def run_company_qualification(company_id: int, session_factory, rate_limiter: Optional[RateLimiter] = None,
                              observer=None, biography_source=None, debug_logger=None,
                              threshold: int = QUALIFICATION_THRESHOLD, region: Optional[str] = None,
                              fetcher: Optional[Fetcher] = None) -> Dict:
    """
    Crawl, score, extract and route one company.

    Signals, contacts and people replace the company's previous run inside
    one transaction.

    Raises:
        ValueError: company_id does not exist
    """
    observer = observer or ConsoleObserver()
    rate_limiter = rate_limiter or RateLimiter()
    fetcher = fetcher or Fetcher(rate_limiter)
    biography_source = biography_source or WikipediaBiographySource(rate_limiter=rate_limiter)
    debug_logger = debug_logger or (get_logger() if DEBUG_LOGS else None)

    with CompanyRepository.transaction(session_factory) as companies:
        company = companies.get(company_id)
        if not company:
            raise ValueError(f"Company {company_id} not found")

        observer.on_company_start(company)

        if not company.website_url:
            print(f"  [SKIP] {company.name} has no website URL")
            summary = error_summary(company_id, status='skipped')
            observer.on_complete(summary)
            return summary

        try:
            pages = Crawler(fetcher).crawl(company.website_url)
        except InvalidUrlError as e:
            print(f"  [CRAWL] Invalid website URL for {company.name}: {e}")
            summary = error_summary(company_id)
            observer.on_complete(summary)
            return summary
        observer.on_crawl_complete(pages)

        qualification = QualificationRepository(companies.session)

        # Signals and score
        analyzer = SignalAnalyzer()
        signals = analyzer.analyze(pages)
        score = analyzer.score(signals)
        qualified = score >= threshold
        qualification.replace_signals(company_id, signals)
        companies.update_qualification(company, score, threshold)
        observer.on_signals(signals, score, qualified)

        # Contact paths
        contacts = ContactExtractor().extract(pages, company.website_url)
        qualification.replace_contacts(company_id, contacts)
        observer.on_contacts(contacts)

        # People, site first then external biography
        people = PeopleExtractor().extract(pages, company.name)
        if company.wikipedia_url:
            people = merge_people(people, biography_source.extract_from_external_biography(
                company.wikipedia_url, company.name))
        qualification.replace_people(company_id, people)
        observer.on_people(people)

        # Routing reads back what was just stored
        selection = PathSelector(qualification).select(company_id, company.name, region or company.region)
        if selection:
            qualification.mark_primary(company_id, selection)
            observer.on_paths_selected(selection)

        if debug_logger:
            debug_logger.log_qualification(company.name, pages, signals, score, contacts, people, selection)

        summary = build_summary(company_id, company.status, pages, signals, score, qualified,
                                contacts, people, selection)
        observer.on_complete(summary)
        return summary


def _try_check(company_id: int, session_factory, **kwargs) -> Dict:
    """Safely run company qualification with error handling"""
    try:
        return run_company_qualification(company_id, session_factory, **kwargs)
    except Exception as e:
        print(f"Failed to qualify company {company_id}: {str(e)}")
        return error_summary(company_id)


def run_bulk_qualification(company_ids: List[int], session_factory, rate_limiter: Optional[RateLimiter] = None,
                           **kwargs) -> List[Dict]:
    """Qualify companies one after another under a single shared rate limiter"""
    rate_limiter = rate_limiter or RateLimiter()
    return [_try_check(c_id, session_factory, rate_limiter=rate_limiter, **kwargs) for c_id in company_ids]


def unqualified_company_ids(session_factory, limit: int = 10) -> List[int]:
    """IDs of companies still waiting for qualification"""
    with CompanyRepository.transaction(session_factory) as companies:
        return [company.id for company in companies.get_unqualified(limit)]
