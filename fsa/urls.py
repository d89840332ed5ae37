from django.urls import path
from . import views

urlpatterns = [
    # Subset construction
    path('api/nfa-to-dfa/', views.convert_nfa_to_dfa, name='nfa_to_dfa'),

    # Structural transformations and comparison
    path('api/canonical-form/', views.canonical_form, name='canonical_form'),
    path('api/remove-unreachable/', views.remove_unreachable, name='remove_unreachable'),
    path('api/compare/', views.compare, name='compare'),

    # Running a machine
    path('api/compute/', views.compute, name='compute'),

    # Property checking
    path('api/check-properties/', views.check_fsa_properties, name='check_fsa_properties'),
]
