# Mock storefront backend
