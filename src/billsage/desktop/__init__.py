"""Flet desktop shell: month calendar, day editor and local reminders."""
