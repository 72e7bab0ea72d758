"""
Read-query composition (filters, sorting, pagination, ranked search params).
"""
