# Services package init
"""
Showcase Backend — Services Layer
==================================

What:  Business logic between the routes (HTTP) and the store (persistence).
How:   Services take a request-scoped AsyncSession plus validated schemas and
       return ORM records; routes turn those into response models.

Service Inventory:
    - CollectionStore:   insert / list newest-first / delete-by-id for one model
    - ImageService:      cover-fit to 450x350 and re-encode as JPEG (Pillow)
    - ImageStorage:      write and delete processed images (local or in-memory)
    - UploadService:     validate type and size → transform → store
    - PortfolioService:  projects and clients (records with an image)
    - ContactService:    contact form submissions
    - NewsletterService: newsletter subscribers (unique email)
"""
