"""Task board UI — Reflex state, components and the API client they use."""
