"""
Database module for ProposalHub

Contains seed data and database utilities.
"""
from app.db.seed_data import seed_all, clear_all, sample_proposals

__all__ = ["seed_all", "clear_all", "sample_proposals"]
