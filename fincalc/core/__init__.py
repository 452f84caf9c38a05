"""Pure calculation engines. Nothing in here performs I/O."""
