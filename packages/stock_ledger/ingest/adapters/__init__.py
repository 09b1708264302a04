"""Per-layout adapters mapping located sheet rows to :class:`Transaction` values."""
