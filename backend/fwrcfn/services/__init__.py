# Services package init
"""
FWRCFN Backend — Services Layer
=================================

What:  Business logic between routes (HTTP) and MongoDB (persistence).

Service Inventory:
    - SecurityService: bcrypt password hashing and JWT session tokens
    - UserService: registration and login
    - FridgeService: active fridge listing and sample seeding

Services receive the database handle per call and keep no per-request
state, so each is exposed as a module-level singleton.
"""
