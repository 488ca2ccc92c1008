"""
Core Constants

Centralized configuration values for the application.
"""

# Pagination defaults
PAGINATION = {
    "default_limit": 20,
    "max_limit": 100,
}

# Dashboard
RECENT_POLICIES_LIMIT = 5

# Characters rejected in free-text location fields
DANGEROUS_CHARACTERS = "${};<>`"

# Sortable fields per list endpoint (request key -> model field)
PROVIDER_ORDERING = {
    "name": "name",
    "agentRate": "agent_rate",
    "ourRate": "our_rate",
    "tds": "tds",
    "gst": "gst",
    "createdAt": "created_at",
    "created_at": "created_at",
}

VEHICLE_CLASS_ORDERING = {
    "name": "name",
    "commissionRate": "commission_rate",
    "agentRate": "agent_rate",
    "ourRate": "our_rate",
    "createdAt": "created_at",
    "created_at": "created_at",
}

AGENT_ORDERING = {
    "name": "name",
    "phoneNumber": "phone_number",
    "city": "city",
    "state": "state",
    "createdAt": "created_at",
    "created_at": "created_at",
}

POLICY_ORDERING = {
    "name": "name",
    "policyNumber": "policy_number",
    "policy_number": "policy_number",
    "startDate": "start_date",
    "start_date": "start_date",
    "endDate": "end_date",
    "end_date": "end_date",
    "premiumAmount": "premium_amount",
    "premium_amount": "premium_amount",
    "ourProfit": "our_profit",
    "agentCommission": "agent_commission",
    "createdAt": "created_at",
    "created_at": "created_at",
}

USER_ORDERING = {
    "name": "name",
    "username": "username",
    "email": "email",
    "role": "role",
    "createdAt": "created_at",
    "created_at": "created_at",
}
