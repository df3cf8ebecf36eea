# Registry endpoints
NPM_REGISTRY_URL = "https://registry.npmjs.org"
PYPI_API_URL = "https://pypi.org/pypi"
GITHUB_API_URL = "https://api.github.com"

# HTTP configuration
REQUEST_TIMEOUT_SECONDS = 10.0  # Upper bound for every registry / GitHub call
REQUEST_DELAY_MS = 100  # Pause before each dependency to avoid rate limiting
USER_AGENT = "rot-detector-cli"

# Environment variables
GITHUB_TOKEN_ENV = "GITHUB_TOKEN"  # Without a token GitHub allows 60 requests/hour

# Scan defaults
DEFAULT_CONCURRENCY = 1  # Sequential, manifest order

# Risk classification thresholds (applied to the overall score)
RISK_HEALTHY_MIN_SCORE = 80
RISK_WARNING_MIN_SCORE = 50

# Manifest file names, in directory lookup order
NPM_MANIFEST = "package.json"
PYPI_MANIFEST = "requirements.txt"
MANIFEST_LOOKUP_ORDER = [NPM_MANIFEST, PYPI_MANIFEST]

# PyPI project_urls keys checked for a source repository, in priority order
PYPI_REPOSITORY_URL_KEYS = ["source", "repository", "code", "github", "homepage"]
