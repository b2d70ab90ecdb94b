"""Константы проекта sqlrunner."""

# Files (relative to the working directory)
CONFIG_FILE = 'sqlrunner.json'
COMMANDS_FILE = 'commands.sql'
LOG_FILE = 'runner.log'

DEFAULT_ENCODING = 'utf-8'

# Database
SSL_DISABLE_PREFIX = 'sslmode=disable '
PING_QUERY = 'SELECT 1'

# Log format
LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Exit codes
EXIT_OK = 0
EXIT_FATAL = 1
EXIT_LOG_SETUP = 2
