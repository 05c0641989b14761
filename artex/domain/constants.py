# Configuration files
CONFIG_DIRNAME = ".artex"
CONFIG_FILENAME = "config.yml"

# Default extractor registration order (kind ids)
DEFAULT_EXTRACTORS = ("Java", "React/TypeScript", "TypeScript", "CSS", "HTML")

# Pseudo-producer used for orchestrator-level errors
MANAGER_PRODUCER = "Manager"

# Default logging level for the CLI
DEFAULT_LOG_LEVEL = "WARNING"
