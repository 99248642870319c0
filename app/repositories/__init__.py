"""
Repository Layer - Data Access

This layer handles all Supabase table access and returns domain models.
Repositories abstract away query details from business logic.
"""
from app.repositories.preorder_repository import PreOrderRepository
from app.repositories.inquiry_repository import ContactRepository, NewsletterRepository
from app.repositories.role_repository import RoleRepository

__all__ = [
    'PreOrderRepository',
    'ContactRepository',
    'NewsletterRepository',
    'RoleRepository'
]
