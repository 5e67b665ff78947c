"""Fixed paths, names and codes shared across the Copybara runner."""

# Exit-code namespaces
COPYBARA_NAMESPACE = "copybara"
RUNNER_NAMESPACE = "action"

# Runner-owned exit codes
CONFIG_ERROR_CODE = 50
ENGINE_LAUNCH_ERROR_CODE = 51
UNKNOWN_ERROR_CODE = 52

# Transformation rules are written as "from||to||path"
RULE_DELIMITER = "||"
DEFAULT_RULE_PATH = "**"

# Repository URL forms
SSH_URL_TEMPLATE = "git@github.com:{}.git"
HTTPS_URL_TEMPLATE = "https://github.com/{}.git"
SSH_URL_PREFIX = "git@github.com:"

# Paths inside the Copybara container
CONTAINER_WORKDIR = "/usr/src/app"
CONTAINER_SSH_KEY = "/root/.ssh/id_rsa"
CONTAINER_KNOWN_HOSTS = "/root/.ssh/known_hosts"
CONTAINER_CONFIG = "/root/copy.bara.sky"
CONTAINER_GIT_CONFIG = "/root/.gitconfig"
CONTAINER_GIT_CREDENTIALS = "/root/.git-credentials"

# The checked-out source of truth, as seen from inside the container
LOCAL_SOT = f"file://{CONTAINER_WORKDIR}"

# Environment variables read by the container entrypoint
ENV_WORKFLOW = "COPYBARA_WORKFLOW"
ENV_SOURCEREF = "COPYBARA_SOURCEREF"
ENV_CONFIG = "COPYBARA_CONFIG"
ENV_OPTIONS = "COPYBARA_OPTIONS"

# Option substrings that mean the caller is driving Copybara directly
WORKFLOW_OPTION_MARKERS = ("migrate", "copy.bara.sky")
CONFIG_OPTION_MARKER = ".bara.sky"

DEFAULT_IMAGE_NAME = "olivr/copybara"
DEFAULT_IMAGE_TAG = "latest"
DEFAULT_BRANCH = "main"
DEFAULT_WORKFLOW = "push"
DEFAULT_PR_TEMPLATE = "${PR_MESSAGE}"

LOGGER_NAME = "copybara_runner"
