"""Warden - account and authentication service."""
