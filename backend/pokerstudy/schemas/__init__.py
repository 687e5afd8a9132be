"""
Pydantic request/response schemas: the API contract with the frontend.

Every schema derives from ApiModel: snake_case in Python, camelCase on the
wire (snake_case is also accepted on input).
"""
