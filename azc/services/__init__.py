"""
Services - business logic on top of the Azure CLI and REST clients.

- auth: AuthenticationService (token resolution and caching)
- config_service: ConfigService (authentication facade, organization/project defaults)
- my_prs: MyPRsService (pull requests by role)
- comments: CommentsService (pull request comment threads)

Import from the submodules directly, e.g.:
    from azc.services.auth import AuthenticationService
"""
