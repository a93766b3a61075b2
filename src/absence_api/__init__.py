"""Home absence declarations API.

Residents declare a period during which their home is empty so that municipal
police can keep an eye on the address. This package holds the REST API, the
business rules and the persistence layer.
"""

__version__ = "0.1.0"
