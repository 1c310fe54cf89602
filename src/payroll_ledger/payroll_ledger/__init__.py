"""Payroll Ledger package.

Turns raw attendance-log rows (biometric exports, manual spreadsheets) into a payroll
ledger. Organized by feature modules (ingestion, shifts, payroll, export, audit) with a
thin Flask controller layer on top of plain service functions.
"""
