"""Pure domain rules (field normalization, campaign scheduling)."""
