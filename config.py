import os
from pathlib import Path
import urllib3
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Database
DB_URL = os.getenv('DATABASE_URL', 'sqlite:///sponsor_pathfinder.db')

# LLM Provider Selection
LLM_PROVIDER = os.getenv('LLM_PROVIDER', 'groq')  # 'groq' or 'ollama'

# Groq API
GROQ_API_KEY = os.getenv('GROQ_API_KEY')
GROQ_MODEL = os.getenv('GROQ_MODEL', 'llama-3.3-70b-versatile')
GROQ_TEMPERATURE = float(os.getenv('GROQ_TEMPERATURE', '0.7'))

# Ollama API
OLLAMA_URL = os.getenv('OLLAMA_URL', 'http://localhost:11434/api/generate')
OLLAMA_MODEL = os.getenv('OLLAMA_MODEL', 'llama3.1')
OLLAMA_TEMPERATURE = float(os.getenv('OLLAMA_TEMPERATURE', '0.7'))

# HTTP Settings
REQUEST_TIMEOUT = int(os.getenv('REQUEST_TIMEOUT', '10'))  # seconds
REQUEST_DELAY_MS = int(os.getenv('REQUEST_DELAY_MS', '1000'))  # min gap between any two requests
USER_AGENT = 'Mozilla/5.0 (compatible; SponsorPathfinder/1.0)'
ALLOW_INSECURE_SSL = os.getenv('ALLOW_INSECURE_SSL', 'false').lower() == 'true'

# Suppress SSL warnings when we intentionally bypass verification
if ALLOW_INSECURE_SSL:
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

# Crawling
MAX_CRAWL_PATHS = int(os.getenv('MAX_CRAWL_PATHS', '10'))  # sub-paths fetched after the homepage

# Qualification
QUALIFICATION_THRESHOLD = int(os.getenv('QUALIFICATION_THRESHOLD', '50'))

# External biography source
WIKIPEDIA_API_URL = os.getenv('WIKIPEDIA_API_URL', 'https://en.wikipedia.org/w/api.php')

# Debugging
DEBUG_LOGS = os.getenv('DEBUG_LOGS', 'false').lower() == 'true'

# Project Structure
BASE_DIR = Path(__file__).parent
PROMPTS_DIR = BASE_DIR / 'prompts'
EVENT_CONTEXT_FILE = Path(os.getenv('EVENT_CONTEXT_FILE', str(BASE_DIR / 'about_the_event.md')))
