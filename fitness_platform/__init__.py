"""Trainer/trainee fitness platform service."""
