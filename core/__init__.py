"""Shared configuration, logging and error types for the auditor."""
