"""Payroll services: calculation, bootstrap, session facade and CLI helpers."""
