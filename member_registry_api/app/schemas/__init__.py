"""
Pydantic schema definitions for stored records and API payloads.

The stored ``Member`` record doubles as the wire representation; the
request body and response envelope models live next to it.
"""
