# =============================================================================
# Sentry API
# =============================================================================
DEFAULT_SERVER_URL = 'https://sentry.io'
API_PREFIX = '/api/0/'
REQUEST_TIMEOUT_SECONDS = 30
DEFAULT_RETRY_AFTER_SECONDS = 60  # used when a 429 carries no usable Retry-After

# =============================================================================
# Environment
# =============================================================================
ENV_AUTH_TOKEN = 'SENTRY_AUTH_TOKEN'
ENV_SERVER_URL = 'SENTRY_SERVER_URL'
ENV_ORG = 'SENTRY_ORG'

# =============================================================================
# Config file
# =============================================================================
APP_DIR_NAME = 'sentry-cli'
CONFIG_FILENAME = 'config.toml'
CONFIG_KEYS = ('default_org', 'server_url', 'auth_token', 'default_project')

# =============================================================================
# Issue listing
# =============================================================================
DEFAULT_SORT = 'date'
SORT_CHOICES = ('date', 'new', 'freq', 'user')
DEFAULT_PAGE_LIMIT = 25
MAX_PAGE_LIMIT = 100
STATUS_FILTER_CHOICES = ('unresolved', 'resolved', 'ignored')
TITLE_MAX_LENGTH = 50
