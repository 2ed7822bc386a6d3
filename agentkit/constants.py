"""Centralized constants for the agentkit package."""

# Configuration record kept in the working directory
CONFIG_FILENAME = "agent.config.json"

# Assembled output directory
AGENT_DIR_NAME = ".agent"

# Kit directory inside a full monorepo download
KIT_SUBDIR = "nguyencoder-kit"

# Registry layout
REGISTRY_SUBDIR = "registry"
PRESETS_SUBDIR = "presets"
SHARED_SUBDIR = ".shared"
ARCHITECTURE_FILE = "ARCHITECTURE.md"

# Module categories
AGENTS_CATEGORY = "agents"
SKILLS_CATEGORY = "skills"
WORKFLOWS_CATEGORY = "workflows"
RULES_CATEGORY = "rules"
ROOT_CATEGORY = "root"

DEFAULT_SOURCE = "github:nguyen-phan123/antigravity-kit"
DEFAULT_PRESET = "minimal"
DEFAULT_REF = "main"

# Environment variables holding a GitHub token for private registries
AUTH_ENV_VARS = ("AGENTKIT_AUTH", "GITHUB_TOKEN")

# Never copied out of a local registry source
IGNORED_SOURCE_NAMES = (".git", "node_modules")
