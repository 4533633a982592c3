"""Coordinators grouped by panel."""
