"""Interface HTTP JSON de MediaCache (FastAPI)."""
