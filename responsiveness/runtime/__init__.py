"""Session orchestration, configuration, logging and error policy."""
