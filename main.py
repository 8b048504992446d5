import argparse
from config import DB_URL, DEBUG_LOGS
from models.database import make_engine, make_session_factory, init_db
from repositories import CompanyRepository, OutreachRepository
from workflows.qualification import run_bulk_qualification, unqualified_company_ids
from workflows.outreach import run_bulk_outreach, top_qualified_company_ids
from utils.debug_logger import get_logger


def add_company(session_factory, name: str, website_url: str, wikipedia_url: str = None, region: str = None) -> int:
    """Insert a company by hand and return its ID"""
    with CompanyRepository.transaction(session_factory) as companies:
        company = companies.add(name, website_url=website_url, wikipedia_url=wikipedia_url, region=region)
        return company.id


def company_ids_by_name(session_factory, names) -> list:
    """Resolve company names (case-insensitive) to IDs, reporting names with no match"""
    company_ids = []
    with CompanyRepository.transaction(session_factory) as companies:
        for name in names:
            company = companies.get_by_name(name)
            if company:
                company_ids.append(company.id)
            else:
                print(f"No company named {name!r}")
    return company_ids


def print_qualification_summary(results):
    print("\n" + "=" * 60)
    print("Bulk Qualification Complete - Summary")
    print("=" * 60)

    qualified = sum(1 for r in results if r['qualified'])
    skipped = sum(1 for r in results if r['status'] == 'skipped')
    failed = sum(1 for r in results if r['status'] == 'error')

    print(f"Companies checked: {len(results)}")
    print(f"  - Qualified: {qualified}")
    print(f"  - Not qualified: {len(results) - qualified - skipped - failed}")
    print(f"  - Skipped (no website): {skipped}")
    print(f"  - Errors: {failed}")
    print("=" * 60)


def print_outreach_summary(session_factory, results):
    print("\n" + "=" * 60)
    print("Outreach Drafts")
    print("=" * 60)
    with OutreachRepository.transaction(session_factory) as outreach:
        for r in results:
            draft = outreach.get_outreach(r['outreach_id'])
            days = ', '.join(str(f['day_offset']) for f in draft['followups'])
            print(f"  Company {r['company_id']}: \"{draft['subject']}\" -> {r['contact']} "
                  f"({draft['status']}, follow-ups on days {days or 'none'})")
    print("=" * 60)


def main():
    """Main entry point: qualify companies and draft outreach."""

    # Parse CLI arguments
    parser = argparse.ArgumentParser(description='Qualify sponsor candidates and route them to a contact path')
    parser.add_argument('companies', nargs='*', type=int, help='Company IDs to process (e.g., 1 2 3)')
    parser.add_argument('--all', action='store_true', help='Process all unqualified companies (or top qualified with --outreach)')
    parser.add_argument('--limit', type=int, default=10, help='Maximum companies for --all (default 10)')
    parser.add_argument('--outreach', action='store_true', help='Generate outreach drafts instead of qualifying')
    parser.add_argument('--region', help='Region filter for people-search links (denmark, nordic, europe, global)')
    parser.add_argument('--company', action='append', default=[], metavar='NAME',
                        help='Company to process by name (repeatable)')
    parser.add_argument('--add', nargs=2, metavar=('NAME', 'WEBSITE'), help='Add a company before processing')
    parser.add_argument('--wikipedia', help='Wikipedia article URL for the company passed to --add')
    parser.add_argument('--db', default=DB_URL, help='Database URL')
    args = parser.parse_args()

    engine = make_engine(args.db)
    init_db(engine)
    session_factory = make_session_factory(engine=engine)

    company_ids = list(args.companies)
    company_ids += company_ids_by_name(session_factory, args.company)
    if args.add:
        company_id = add_company(session_factory, args.add[0], args.add[1], args.wikipedia, args.region)
        print(f"Added {args.add[0]} as company {company_id}")
        company_ids.append(company_id)

    # Determine which companies to process
    if args.all:
        company_ids = (top_qualified_company_ids(session_factory, args.limit) if args.outreach
                       else unqualified_company_ids(session_factory, args.limit))

    if not company_ids:
        print("No companies to process. Pass company IDs, --company NAME, --add NAME WEBSITE or --all.")
        return

    print("=" * 60)
    print("Sponsor Pathfinder - " + ("Outreach" if args.outreach else "Qualification"))
    print("=" * 60)
    print(f"Companies: {company_ids}")
    if DEBUG_LOGS:
        print(f"Debug logs will be saved to: {get_logger().run_dir}")
    print("=" * 60)

    if args.outreach:
        print_outreach_summary(session_factory, run_bulk_outreach(company_ids, session_factory, region=args.region))
    else:
        print_qualification_summary(run_bulk_qualification(company_ids, session_factory, region=args.region))


if __name__ == "__main__":
    main()
