"""Shift Tracker package.

Clock-in/clock-out attendance: a per-session shift state machine on top of a
remote record store, exposed through a thin Flask JSON controller layer.
"""
