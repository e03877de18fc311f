"""
Core domain models, Decimal primitives, and snapshot contracts.

Cash book, securities, orders, fee models and portfolio snapshots consumed
by the buying power model. Nothing here talks to brokers or exchanges.
"""
