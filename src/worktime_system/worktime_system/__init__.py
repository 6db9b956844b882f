"""Work-time accounting package.

Feature modules (attendance, audit, recalculation, reconciliation, ...) sit on
top of a pure interval-arithmetic layer, with thin Flask controllers and
service/repository layers.
"""
