"""
connectors — clients for external identity providers.

Currently only Google: ``GoogleOAuthClient`` turns an OAuth access token
obtained by the frontend into a verified Google profile.
"""
