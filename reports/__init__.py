"""Tabular views of generated timetables (pandas)."""
