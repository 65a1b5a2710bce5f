"""Search roles: candidate generation, verification and local parallel runs."""
