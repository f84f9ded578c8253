APP_NAME = "dotkit"

# Prefix for environment variables overriding effective config values,
# e.g. DOTKIT_CONFIG__BACKUP__PREFIX=.old_dotfiles_
ENV_PREFIX = "DOTKIT_CONFIG__"

DEFAULT_BACKUP_PREFIX = ".dotfiles_backup_"
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
