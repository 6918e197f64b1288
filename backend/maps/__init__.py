"""
Mapping-service integration.

The browser loads the third-party maps / place-autocomplete widget itself;
the server only hands out the API key from runtime configuration.
"""
