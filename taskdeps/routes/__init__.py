"""HTTP routers exposing the dependency service."""
