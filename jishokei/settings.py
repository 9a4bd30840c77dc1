"""
Settings and configuration for jishokei.

Rule table locations follow the file names used by the original editor
plugin (index.json, conjugate_rule.json, special_rule.json).
"""

import os
from pathlib import Path

# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = PACKAGE_DIR / "data"

# Directory holding the three JSON rule tables
RULES_DIR = Path(os.environ.get("JISHOKEI_RULES_DIR", DATA_DIR))

INDEX_FILE_NAME = "index.json"
CONJUGATE_RULE_FILE_NAME = "conjugate_rule.json"
SPECIAL_RULE_FILE_NAME = "special_rule.json"
DB_FILE_NAME = "rules.db"

# Individual overrides for each table
INDEX_PATH = Path(os.environ.get("JISHOKEI_INDEX_PATH", RULES_DIR / INDEX_FILE_NAME))
CONJUGATE_RULE_PATH = Path(
    os.environ.get("JISHOKEI_CONJUGATE_RULE_PATH", RULES_DIR / CONJUGATE_RULE_FILE_NAME)
)
SPECIAL_RULE_PATH = Path(
    os.environ.get("JISHOKEI_SPECIAL_RULE_PATH", RULES_DIR / SPECIAL_RULE_FILE_NAME)
)

# SQLite rule database (see jishokei.db)
DB_PATH = Path(os.environ.get("JISHOKEI_DB_PATH", RULES_DIR / DB_FILE_NAME))

# Debug mode
DEBUG = os.environ.get("JISHOKEI_DEBUG", "").lower() in ("1", "true", "yes")

# Ending appended to every window before rule lookup (ichidan citation form)
ICHIDAN_ENDING = "る"
