"""
Receipt catalog domain package.

Contains the record schema, backend lookups, the detail view controller and
the render decision logic for the receipt detail page.
"""
