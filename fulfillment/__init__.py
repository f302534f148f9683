"""
Bulk complimentary ticket fulfillment.
"""
