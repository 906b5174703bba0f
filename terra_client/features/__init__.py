"""Resource clients for the CRM backend, one package per feature."""
