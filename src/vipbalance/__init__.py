"""vip-balance - fetch a contract balance from the VIP billing API"""

__version__ = "0.1.0"
