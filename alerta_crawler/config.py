
# URL Configuration
BASE_URL = "https://alertalicitacao.com.br"

# Search Configuration
SEARCH_KEYWORD = "catarata"

# Selectors
SELECTORS = {
    "search": {
        "input_role": "textbox",
        "input_name": "Procurar...",
        "button_role": "button",
        "button_name": "",  # Icon button, no accessible name
    },
    "list": {
        "panel": "div.panel",
        "title_link": "a[href]",
        # Tags scanned (in order) for an upper-case organization name
        "organization_tags": ("font", "p"),
    },
}

# Labels shown next to field values inside a panel
LABELS = {
    "organization": "Orgão:",
    "opening_date": "Data de abertura|Abertura",
    "estimated_value": "Valor:",
}

# Crawler Configuration
TIMEOUT = 30000  # 30 seconds
RESULT_WAIT_TIMEOUT = 10000  # Wait for first panel after search
HEADLESS = False  # Set to True to run without a visible browser window

# Parsing
REQUIRE_OPENING_DATE = False  # True drops panels without an opening date

# Output
RESULTS_DIR = "results"
ERROR_PAGE_FILE = "error_page.html"
