"""Pure domain rules (password strength, email normalization)."""
