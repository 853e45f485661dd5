from django.urls import path
from . import views

urlpatterns = [
    path('register/', views.register_user, name='register'),
    path('login/', views.login_user, name='login'),
    path('logout/', views.logout_user, name='logout'),
    path('profile/', views.get_user_profile, name='profile'),
    path('profiles/', views.ProfileListView.as_view(), name='profile-list'),
    path('profiles/<uuid:user_id>/', views.profile_detail, name='profile-detail'),
    path('auth-status/', views.check_auth_status, name='auth-status'),
]
