# ids double as storage keys (file names); no dots, no separators
KEY_PATTERN = r"^[A-Za-z0-9_@-]{1,64}$"
