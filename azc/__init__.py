"""
azc - Azure DevOps pull request helper built on the Azure CLI.

Package structure:
    azc/
    ├── secure_config.py      # Environment / .env configuration
    ├── async_http_client.py  # httpx wrapper with enforced TLS
    ├── core/                 # Logging and config re-exports
    ├── clients/              # Azure CLI executor, error taxonomy, REST client
    ├── services/             # Authentication, config, PR listing, comments
    ├── domain/               # Dataclasses parsed from CLI / REST JSON
    ├── security/             # Command-line argument validation
    └── utils/                # Error-handling helpers, timestamp parsing
"""

__version__ = "0.1.0"
