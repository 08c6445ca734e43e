"""Request controllers for the paper review API."""
