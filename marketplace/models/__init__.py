# Import all models for easy access
from .tag import Tag, TagCreate, TagRead
from .category import (
    Category, CategoryTag, CategoryCreate, CategoryRead, CategoryTagsRef, CategoryTitleRef
)
from .product import (
    Product, ProductTag, ProductCreate, ProductUpdate, ProductRead,
    ProductListItem, ProductDetail, ProductSearchResult, ProductName
)
from .user import (
    User, UserRead, CompanyInfoUpdate, SocialProfileUpdate, UserInfoUpdate,
    NameLocationUpdate, PlanUpdate
)
from .developer import Developer, DeveloperRead

# Export all models
__all__ = [
    # Catalog models
    "Tag", "TagCreate", "TagRead",
    "Category", "CategoryTag", "CategoryCreate", "CategoryRead", "CategoryTagsRef", "CategoryTitleRef",

    # Product models
    "Product", "ProductTag", "ProductCreate", "ProductUpdate", "ProductRead",
    "ProductListItem", "ProductDetail", "ProductSearchResult", "ProductName",

    # User models
    "User", "UserRead", "CompanyInfoUpdate", "SocialProfileUpdate", "UserInfoUpdate",
    "NameLocationUpdate", "PlanUpdate",
    "Developer", "DeveloperRead",
]
