# Environment variables
DOTENV_FILE = ".env"
ENV_BASE_URL = "UIPATH_URL"
ENV_UIPATH_ACCESS_TOKEN = "UIPATH_ACCESS_TOKEN"
ENV_UNATTENDED_USER_ACCESS_TOKEN = "UNATTENDED_USER_ACCESS_TOKEN"
ENV_ACCOUNT_NAME = "UIPATH_ACCOUNT_NAME"
ENV_TENANT_NAME = "UIPATH_TENANT_NAME"
ENV_CLIENT_ID = "UIPATH_CLIENT_ID"
ENV_CLIENT_SECRET = "UIPATH_CLIENT_SECRET"
ENV_CLIENT_SCOPE = "UIPATH_CLIENT_SCOPE"
ENV_FOLDER_KEY = "UIPATH_FOLDER_KEY"
ENV_FOLDER_PATH = "UIPATH_FOLDER_PATH"
ENV_ORGANIZATION_ID = "UIPATH_ORGANIZATION_ID"
ENV_TENANT_ID = "UIPATH_TENANT_ID"
ENV_DISABLE_SSL_VERIFY = "UIPATH_DISABLE_SSL_VERIFY"

# Headers
HEADER_FOLDER_KEY = "x-uipath-folderkey"
HEADER_FOLDER_PATH = "x-uipath-folderpath"
HEADER_FOLDER_ID = "x-uipath-organizationunitid"
HEADER_USER_AGENT = "x-uipath-user-agent"

# Identity
DEFAULT_CLIENT_SCOPE = (
    "OR.Execution OR.Jobs OR.Folders.Read OR.Robots.Read OR.Machines.Read"
)

# Jobs
DEFAULT_POLL_INTERVAL = 10.0
DEFAULT_TIMEOUT = 1800.0
