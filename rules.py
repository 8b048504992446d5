"""
Static qualification and routing tables.

Every table is ordered: where a piece of text could match more than one
entry, the first entry wins.
"""

# =============================================================================
# CRAWLING
# =============================================================================

RELEVANT_PATHS = [
    '/',
    '/about',
    '/about-us',
    '/brand',
    '/community',
    '/sustainability',
    '/partnerships',
    '/partners',
    '/sponsorship',
    '/sponsorships',
    '/press',
    '/news',
    '/newsroom',
    '/media',
    '/contact',
    '/team',
    '/leadership',
    '/our-team',
    '/about/team',
]

# =============================================================================
# SPONSORSHIP SIGNALS
# =============================================================================

SIGNAL_CATEGORIES = {
    'sport': {
        'patterns': [
            r'\b(football|soccer|athletics|sport|sports|athlete|athletes|team|teams|championship|tournament)\b',
        ],
        'weight': 15,
    },
    'youth': {
        'patterns': [
            r'\b(youth|young|generation|next gen|nextgen|teenager|teens|kids|children|school|education)\b',
        ],
        'weight': 20,
    },
    'culture': {
        'patterns': [
            r'\b(urban|street|culture|cultural|hip.?hop|music|art|creative|creativity|lifestyle|fashion)\b',
        ],
        'weight': 20,
    },
    'community': {
        'patterns': [
            r'\b(community|communities|local|grassroots|neighborhood|social impact|giving back|initiative)\b',
        ],
        'weight': 15,
    },
    'partnership': {
        'patterns': [
            r'\b(partner|partners|partnership|partnerships|collaborate|collaboration|sponsor|sponsored|sponsorship|activate|activation)\b',
        ],
        'weight': 25,
    },
    'previous_sponsorship': {
        'patterns': [
            r'\b(official partner|proud partner|official sponsor|title sponsor|presenting sponsor|supported by|in partnership with)\b',
        ],
        'weight': 30,
    },
    'events': {
        'patterns': [
            r'\b(event|events|festival|festivals|tournament|championship|competition|experience|experiential)\b',
        ],
        'weight': 10,
    },
}

SNIPPET_CONTEXT_CHARS = 50

# =============================================================================
# CONTACTS
# =============================================================================

# Local-part keyword -> confidence
EMAIL_PRIORITY = [
    ('partnerships', 100),
    ('partner', 95),
    ('sponsorship', 95),
    ('sponsor', 90),
    ('marketing', 80),
    ('brand', 75),
    ('press', 60),
    ('media', 60),
    ('pr', 55),
    ('info', 40),
    ('contact', 35),
    ('hello', 30),
]

DEFAULT_EMAIL_TYPE = 'general'
DEFAULT_EMAIL_CONFIDENCE = 20

PLACEHOLDER_EMAIL_DOMAINS = ['example.com', 'email.com', 'domain.com', 'test.com']
MAX_EMAIL_LENGTH = 100

FORM_PAGE_KEYWORDS = ['contact', 'partner']
FORM_CONFIDENCE = 40

AGENCY_PATTERNS = [
    r'(?:PR|press|media|marketing)\s+(?:agency|firm|partner)[:\s]+([A-Z][a-zA-Z\s&]+)',
    r'(?:represented by|handled by|contact)[:\s]+([A-Z][a-zA-Z\s&]+(?:PR|Communications|Agency))',
]
AGENCY_NAME_MIN_LENGTH = 3  # exclusive
AGENCY_NAME_MAX_LENGTH = 50  # exclusive
AGENCY_CONFIDENCE = 50

# =============================================================================
# PEOPLE
# =============================================================================

TEAM_PAGE_KEYWORDS = ['team', 'leadership', 'about']

PERSON_CARD_SELECTORS = [
    '.team-member',
    '.person',
    '.staff',
    '.executive',
    '.leadership-card',
    '[class*="team"]',
    '[class*="person"]',
    '[class*="member"]',
]
PERSON_NAME_SELECTOR = 'h2, h3, h4, .name, [class*="name"]'
PERSON_TITLE_SELECTOR = '.title, .role, .position, [class*="title"], [class*="role"]'
CARD_FALLBACK_MAX_CHARS = 200

NAME_PATTERN = r'[A-Z][a-z]+(?:\s+[A-Z][a-z]+){1,3}'

RELEVANT_DEPARTMENTS = {
    'brand': ['brand', 'branding'],
    'partnerships': ['partnership', 'partner', 'sponsorship', 'sponsor'],
    'marketing': ['marketing', 'market', 'growth'],
    'sports': ['sport', 'sports', 'athletic'],
    'csr': ['csr', 'sustainability', 'social responsibility', 'impact'],
    'community': ['community', 'communities', 'engagement'],
    'communications': ['communications', 'pr', 'press', 'media'],
}

RELEVANT_TITLE_PATTERNS = [
    r'\b(cmo|chief marketing officer)\b',
    r'\b(vp|vice president).*(marketing|brand|partnership|sponsorship)\b',
    r'\b(head|director|manager).*(marketing|brand|partnership|sponsorship|community|csr|sports)\b',
    r'\b(marketing|brand|partnership|sponsorship|community|csr|sports).*(head|director|manager)\b',
]

PERSON_TEXT_PATTERNS = [
    r'([A-Z][a-z]+(?:\s+[A-Z][a-z]+){1,2})\s*[,\-–]\s*((?:Chief|VP|Vice President|Head|Director|Manager)[^,.\n]+)',
    r'(?i:led by|headed by|managed by)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+){1,2})',
]

# =============================================================================
# PATH RANKING
# =============================================================================

PATH_SCORES = {
    'named_email': 100,
    'partnership_inbox': 75,
    'marketing_inbox': 70,
    'agency': 50,
    'press_email': 45,
    'form': 40,
    'generic_email': 30,
    'external_search': 25,
}

PARTNERSHIP_EMAIL_TYPES = {'partnerships', 'partner', 'sponsorship', 'sponsor'}
MARKETING_EMAIL_TYPES = {'marketing', 'brand'}
PRESS_EMAIL_TYPES = {'press', 'media'}

FALLBACK_SEARCH_TITLE = 'Brand Partnerships'
MANUAL_SEARCH_TITLES = [
    'Brand Partnerships',
    'Sports Marketing',
    'Sponsorship Manager',
    'Marketing Director',
]

REGIONS = {
    'denmark': 'Denmark',
    'nordic': 'Denmark OR Sweden OR Norway OR Finland',
    'europe': 'Europe',
    'global': '',
}

PEOPLE_SEARCH_URL = 'https://www.linkedin.com/search/results/people/'
