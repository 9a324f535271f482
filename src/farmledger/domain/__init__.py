"""Domain layer for farmledger.

Services live in their own modules (``farmledger.domain.crop`` and so on)
and are imported from there. They depend on ``farmledger.database.base``,
which itself imports ``farmledger.domain.entities``, so this package does
not import them eagerly.
"""
