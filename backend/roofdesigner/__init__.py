"""Roof Designer: AI interior design assistant for a rooftop studio."""
