"""Storefront cart & checkout service."""
