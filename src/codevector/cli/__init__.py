"""codevector CLI."""
