"""
Fleet trade core: pool routing, quoting, bundler failover and drip scheduling.
"""
