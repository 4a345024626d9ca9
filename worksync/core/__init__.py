"""Core domain primitives shared by the server and the sync client."""
