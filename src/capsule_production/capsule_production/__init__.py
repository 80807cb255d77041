"""Capsule production package.

Organized by feature modules (worklogs, orders) with a thin Flask
controller layer over service/repository layers. The work-unit calculator,
worklog aggregator and order prioritizer are pure and shared by every
caller (order list, order detail, home summary, CSV export).
"""
