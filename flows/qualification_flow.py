# flows/qualification_flow.py
from typing import Dict, List, Optional

from prefect import flow, task
from prefect.cache_policies import NONE

from config import DB_URL
from models.database import make_engine, make_session_factory, init_db
from utils.rate_limiter import RateLimiter
from utils.workflow_observer import ConsoleObserver
from workflows.qualification import _try_check, unqualified_company_ids


@task(cache_policy=NONE)
def qualify_company(company_id: int, session_factory, rate_limiter: RateLimiter,
                    region: Optional[str] = None) -> Dict:
    """Qualify one company - returns serializable summary, an error summary on any failure"""
    return _try_check(company_id, session_factory, rate_limiter=rate_limiter,
                      observer=ConsoleObserver(), region=region)


@flow(name="qualify-companies", log_prints=True)
def qualify_companies_flow(company_ids: Optional[List[int]] = None, limit: int = 10,
                           region: Optional[str] = None, db_url: str = DB_URL) -> List[Dict]:
    """Qualify the given companies, or the next `limit` unqualified ones"""
    engine = make_engine(db_url)
    init_db(engine)
    session_factory = make_session_factory(engine=engine)

    company_ids = company_ids or unqualified_company_ids(session_factory, limit)
    print(f"\n{'='*60}\nQualifying {len(company_ids)} companies\n{'='*60}")

    # One limiter for the whole run; companies are processed one at a time
    rate_limiter = RateLimiter()
    summaries = [qualify_company(c_id, session_factory, rate_limiter, region) for c_id in company_ids]

    qualified = sum(1 for s in summaries if s['qualified'])
    print(f"\n{'='*60}\nQualified {qualified}/{len(summaries)} companies\n{'='*60}")
    return summaries


if __name__ == "__main__":
    qualify_companies_flow()
