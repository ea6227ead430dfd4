"""Sample library: a mix of pure helpers and I/O code for propwise to rank."""
