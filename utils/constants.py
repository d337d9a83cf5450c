"""
Constants for the SYSPRO client object core.
"""

# Reserved attribute keys
ID_KEY = "id"  # Identifier, always stored first when given at construction
OBJECT_TYPE_KEY = "object"  # Names the resource variant in a decoded response

# Display settings
JSON_INDENT = 2  # Pretty-printed JSON indentation used by str() and repr()

# Logging
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
