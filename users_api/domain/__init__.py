"""Pure helpers (validation, ordering, paging) with no IO."""
