from pathlib import Path
from datetime import datetime
from dataclasses import asdict
import json
from functools import lru_cache
from typing import Dict, List, Optional

from models.schemas import PageResult, Signal, Contact, Person, PathSelection

# Helper functions
_slugify = lambda name: ''.join(c if c.isalnum() or c in '-_' else '_' for c in name)
_log_file_path = lambda run_dir, slug, suffix: run_dir / f"{slug}_{suffix}.json"

def _write_json(file_path, data):
    """Write JSON data to file"""
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)
    return file_path

_page_entry = lambda page: {
    'url': page.url, 'success': page.success, 'error': page.error,
    'text_length': len(page.text), 'links': len(page.links),
}

@lru_cache(maxsize=1)
def get_logger():
    """Get or create debug logger (cached singleton)"""
    return DebugLogger()

class DebugLogger:
    """Writes one JSON file per company qualification run."""

    def __init__(self, base_dir: str = "debug_logs"):
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

        # Create timestamped run directory
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.run_dir = self.base_dir / timestamp
        self.run_dir.mkdir(exist_ok=True)

    def log_qualification(self, company_name: str, pages: Dict[str, PageResult], signals: List[Signal],
                          score: int, contacts: List[Contact], people: List[Person],
                          selection: Optional[PathSelection]) -> Path:
        """Log crawl, extraction and ranking results for one company."""
        log_file = _write_json(
            _log_file_path(self.run_dir, _slugify(company_name), 'qualification'),
            {
                'company': company_name,
                'timestamp': datetime.now().isoformat(),
                'pages': {path: _page_entry(page) for path, page in pages.items()},
                'signals': [asdict(s) for s in signals],
                'score': score,
                'contacts': [asdict(c) for c in contacts],
                'people': [asdict(p) for p in people],
                'selection': asdict(selection) if selection else None,
            }
        )

        print(f"[DEBUG] Qualification logged to: {log_file}")
        return log_file

    def log_llm_call(self, company_name: str, prompt_type: str, variables: Dict, llm_response: Dict) -> Path:
        """Log LLM prompt variables and response."""
        timestamp = datetime.now().strftime('%H%M%S')
        log_file = _write_json(
            _log_file_path(self.run_dir, _slugify(company_name), f"{prompt_type}_{timestamp}_llm"),
            {
                'prompt_type': prompt_type,
                'timestamp': datetime.now().isoformat(),
                'variables': variables,
                'llm_response': llm_response,
            }
        )

        print(f"[DEBUG] LLM call logged to: {log_file}")
        return log_file
