"""Domain layer for pocketledger application.

Services are imported from their own modules (``pocketledger.domain.budget``
and so on); this package stays import-free so the database layer can depend
on ``pocketledger.domain.entities`` without cycles.
"""
