"""
Pydantic schema definitions for stored records and API payloads.
"""
