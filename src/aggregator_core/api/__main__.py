"""Allow running the API as: python -m aggregator_core.api [--config path]."""

from aggregator_core.api.runner import main

main()
