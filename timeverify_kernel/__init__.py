"""
Time Verification Kernel

Persistence, typed errors, structured logging, DTOs, read-only selectors and
flush-only services for weekly time verification:
- Reference data (time codes, employees, case display info)
- Case and non-case time records
- Fiscal calendar months and derived posting cycles
"""

__version__ = "0.1.0"
