from django.contrib import admin
from django.conf import settings
from django.conf.urls.static import static
from django.urls import path, include

from eglise.views import dashboard_view


urlpatterns = [
    path('', dashboard_view, name='dashboard'),
    path('admin/', admin.site.urls),

    # Comptes & personnel
    path('accounts/', include(('accounts.urls', 'accounts'), namespace='accounts')),

    # Plateforme (super administrateur, inscriptions)
    path('plateforme/', include(('plateforme.urls', 'plateforme'), namespace='plateforme')),

    # Données de l'église
    path('eglise/', include(('eglise.urls', 'eglise'), namespace='eglise')),

    # Cotisations
    path('cotisations/', include(('cotisations.urls', 'cotisations'), namespace='cotisations')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
