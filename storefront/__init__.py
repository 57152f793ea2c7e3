# Storefront catalog and cart service
