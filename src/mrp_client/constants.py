"""Constants used throughout the MRP client."""

DEFAULT_API_URL = "http://localhost:8081/mrp/"

GRAPHQL_PATH = "/graphql"

# Auth endpoints reachable without a bearer token
DEFAULT_PUBLIC_ENDPOINTS = ("auth/login", "auth/register")

# Third-party upload hosts whose requests must leave untouched
DEFAULT_UPLOAD_MARKERS = ("api.cloudinary.com",)

# extensions.code the backend uses for authentication failures
UNAUTHENTICATED_CODE = "UNAUTHENTICATED"

AUTH_ERROR_KEYWORDS = ("unauthorized", "authentication")

LOGIN_ROUTE = "/login"

ACCESS_TOKEN_ENV_VAR = "MRP_ACCESS_TOKEN"

USER_AGENT = "mrp-client"
