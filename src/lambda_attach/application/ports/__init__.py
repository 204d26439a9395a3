"""Interfaces to the host library and the remote compute provider."""
