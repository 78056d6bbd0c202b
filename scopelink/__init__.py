"""scopelink - link locally built sibling packages of one npm scope into each other."""
