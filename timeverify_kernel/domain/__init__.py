"""Pure domain types for time verification: values, DTOs and eligibility."""
