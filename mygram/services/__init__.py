# Services package init
"""
MyGram Backend — Services Layer
=================================

What:  Business logic between routes (HTTP) and stores (persistence).
How:   Services receive their collaborators through the constructor and are
       built per request by the factories in mygram/dependencies.py.

Service Inventory:
    - PasswordHasher:     bcrypt hash/verify
    - TokenService:       session token issue/verify (PyJWT)
    - OwnershipRule:      shared owner check for update/delete
    - AuthService:        sign-up and login flows
    - UserService, PhotoService, CommentService, SocialMediaService: CRUD
"""
