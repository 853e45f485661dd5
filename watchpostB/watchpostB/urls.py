from django.contrib import admin
from django.urls import include, path

# MEDIA_ROOT is not routed: stored videos are served by watchpost.views.get_surveillance_video
urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/auth/', include('accounts.urls')),
    path('api/watchpost/', include('watchpost.urls')),
]
