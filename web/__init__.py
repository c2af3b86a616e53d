"""MicroEstado Engine v1.0 — HTTP and WebSocket surface."""
