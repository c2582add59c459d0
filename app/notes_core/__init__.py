"""Shared code for the Notes API Lambda functions."""
