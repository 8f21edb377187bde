"""UI adapters hosting an EvilSession."""
