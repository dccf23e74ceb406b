from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

# Main URL Configuration
# Every app answers with JSON, the browser client lives elsewhere

urlpatterns = [

    path('admin/', admin.site.urls),
    path('dashboard/', include('apps.core.urls')),
    path('deals/', include('apps.deals.urls')),
    path('offers/', include('apps.offers.urls')),
    path('contacts/', include('apps.contacts.urls')),
    path('properties/', include('apps.properties.urls')),

]

if settings.DEBUG:
    # Media files (user uploads: logos, avatars)
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
