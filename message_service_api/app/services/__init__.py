"""
Service layer.

Request parsers, the message store gateway and HTML rendering live
here so that API handlers only orchestrate them.
"""
