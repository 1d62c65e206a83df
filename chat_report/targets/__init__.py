"""Delivery targets for composed notifications."""
