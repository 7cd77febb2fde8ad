"""Generated domain table.

Produced offline from the upstream enriched OpenAPI specs
(``x-ves-cli-domain`` metadata). DO NOT EDIT MANUALLY.

Each entry carries the domain's tier requirement, preview flag,
category, use cases, declared related domains, workflow references and
the REST resource types the CLI exposes for it. Entries flagged
``cli_only`` are implemented by the CLI itself rather than generated.
"""

from __future__ import annotations

from typing import Any

GENERATED_AT = "2026-01-02T23:47:33Z"

CLI_TITLE = "F5 Distributed Cloud API"
CLI_SUMMARY = (
    "Multi-cloud application services with load balancing, WAF, DNS, and edge "
    "infrastructure. Unified platform for security and connectivity."
)

DOMAIN_TABLE: dict[str, dict[str, Any]] = {
    # Infrastructure & Deployment
    "customer_edge": {
        "display_name": "Customer Edge",
        "short": "Manage customer edge nodes",
        "medium": "Register, upgrade and configure customer edge nodes and their interfaces.",
        "requires_tier": "Standard",
        "category": "Infrastructure",
        "use_cases": [
            "Configure customer edge nodes",
            "Manage edge node registration and lifecycle",
            "Control module management and upgrades",
            "Configure network interfaces and USB policies",
        ],
        "related_domains": ["site", "cloud_infrastructure"],
        "resource_types": ["registration", "module_management", "usb_policy"],
    },
    "cloud_infrastructure": {
        "display_name": "Cloud Infrastructure",
        "short": "Connect cloud providers",
        "medium": "Manage cloud credentials, connectivity and elastic provisioning for AWS, Azure and GCP.",
        "requires_tier": "Standard",
        "category": "Infrastructure",
        "use_cases": [
            "Connect to cloud providers (AWS, Azure, GCP)",
            "Manage cloud credentials and authentication",
            "Configure cloud connectivity and elastic provisioning",
            "Link and manage cloud regions",
        ],
        "related_domains": ["site", "customer_edge"],
        "resource_types": ["cloud_credentials", "cloud_connect", "cloud_elastic_ip"],
    },
    "container_services": {
        "display_name": "Container Services",
        "short": "Run workloads on virtual Kubernetes",
        "medium": "Deploy vK8s namespaces, workloads and fleets across virtual sites.",
        "requires_tier": "Professional",
        "category": "Infrastructure",
        "use_cases": [
            "Deploy Virtual Kubernetes (vK8s) namespaces",
            "Manage container workloads in multi-tenant environments",
            "Configure virtual sites and appliances",
            "Manage fleet configurations and deployments",
            "Handle workload orchestration",
        ],
        "related_domains": ["kubernetes", "service_mesh"],
        "workflows": ["Deploy a vK8s workload"],
        "resource_types": ["virtual_k8s", "workload", "fleet", "virtual_site"],
    },
    "kubernetes": {
        "display_name": "Kubernetes",
        "short": "Manage managed Kubernetes clusters",
        "medium": "Manage enterprise Kubernetes clusters, pod security policies and container registries.",
        "requires_tier": "Professional",
        "category": "Infrastructure",
        "use_cases": [
            "Manage enterprise Kubernetes clusters",
            "Configure pod security policies",
            "Manage container registries",
            "Integrate with external Kubernetes clusters",
        ],
        "related_domains": ["container_services", "service_mesh"],
        "resource_types": ["k8s_cluster", "k8s_pod_security_policy", "container_registry"],
    },
    "service_mesh": {
        "display_name": "Service Mesh",
        "short": "Configure service mesh connectivity",
        "medium": "Configure endpoint discovery, routing, NFV services and application types.",
        "requires_tier": "Professional",
        "category": "Infrastructure",
        "use_cases": [
            "Configure service mesh connectivity",
            "Manage endpoint discovery and routing",
            "Configure NFV services",
            "Define application settings and types",
        ],
        "related_domains": ["kubernetes", "container_services", "virtual"],
        "resource_types": ["endpoint", "discovery", "nfv_service", "app_type"],
    },
    "site": {
        "display_name": "Site",
        "short": "Deploy and manage sites",
        "medium": "Deploy cloud, secure mesh and on-premises sites and integrate external clusters.",
        "requires_tier": "Standard",
        "category": "Infrastructure",
        "use_cases": [
            "Deploy F5 XC across cloud providers (AWS, Azure, GCP)",
            "Manage secure mesh sites",
            "Deploy voltstack sites for on-premises",
            "Integrate external Kubernetes clusters",
        ],
        "related_domains": ["cloud_infrastructure", "customer_edge"],
        "workflows": ["Deploy AWS Cloud Site"],
        "resource_types": [
            "aws_vpc_site",
            "azure_vnet_site",
            "gcp_vpc_site",
            "securemesh_site",
            "voltstack_site",
        ],
    },
    # Security - Core
    "api": {
        "display_name": "API Security",
        "short": "Discover and protect APIs",
        "medium": "Discover, catalog and test APIs and manage API credentials and groups.",
        "requires_tier": "Professional",
        "category": "Security",
        "use_cases": [
            "Discover and catalog APIs",
            "Test API security and behavior",
            "Manage API credentials",
            "Define API groups and testing policies",
        ],
        "related_domains": ["waf", "network_security"],
        "workflows": ["Protect API with Security Policy"],
        "resource_types": ["api_catalog", "api_definition", "api_crawler", "api_testing", "api_group"],
    },
    "waf": {
        "display_name": "Web App Firewall",
        "short": "Configure web application firewall",
        "medium": "Configure application firewall rules, security policies and protocol inspection.",
        "requires_tier": "Professional",
        "category": "Security",
        "use_cases": [
            "Configure web application firewall rules",
            "Manage application security policies",
            "Enable enhanced firewall capabilities",
            "Configure protocol inspection",
        ],
        "related_domains": ["api", "network_security", "virtual"],
        "resource_types": ["app_firewall", "waf_exclusion_policy", "protocol_inspection"],
    },
    "bot_defense": {
        "display_name": "Bot Defense",
        "short": "Defend applications against bots",
        "medium": "Manage bot allowlists, defense policies, endpoints and mobile SDK protection.",
        "requires_tier": "Professional",
        "category": "Security",
        "use_cases": [
            "Manage bot allowlists and defense policies",
            "Configure bot endpoints and infrastructure",
            "Integrate threat intelligence",
            "Manage mobile SDK for app protection",
        ],
        "related_domains": ["waf", "network_security"],
        "resource_types": ["bot_allowlist_policy", "bot_endpoint_policy", "bot_infrastructure"],
    },
    "network_security": {
        "display_name": "Network Security",
        "short": "Configure network firewall policies",
        "medium": "Configure firewall, ACL, NAT, policy-based routing and forward proxy policies.",
        "requires_tier": "Professional",
        "category": "Security",
        "use_cases": [
            "Configure network firewall and ACL policies",
            "Manage NAT policies and port forwarding",
            "Configure policy-based routing",
            "Define network segments and policies",
            "Configure forward proxy policies",
        ],
        "related_domains": ["waf", "api", "network"],
        "resource_types": [
            "network_firewall",
            "network_policy",
            "nat_policy",
            "forward_proxy_policy",
            "segment",
        ],
    },
    "blindfold": {
        "display_name": "Blindfold",
        "short": "Encrypt secrets with blindfold",
        "medium": "Configure secret policies and enforce data protection for sensitive material.",
        "requires_tier": "Professional",
        "category": "Security",
        "use_cases": [
            "Configure secret policies for encryption",
            "Manage sensitive data encryption",
            "Enforce data protection policies",
        ],
        "related_domains": ["client_side_defense", "certificates"],
        "resource_types": ["secret_policy", "secret_policy_rule"],
    },
    "client_side_defense": {
        "display_name": "Client-Side Defense",
        "short": "Protect user data in the browser",
        "medium": "Define sensitive data policies, device identification and privacy controls.",
        "requires_tier": "Professional",
        "category": "Security",
        "use_cases": [
            "Protect user data in transit",
            "Define sensitive data policies",
            "Manage device identification",
            "Configure data privacy controls",
        ],
        "related_domains": ["blindfold", "waf"],
        "resource_types": ["sensitive_data_policy", "device_id"],
    },
    "ddos": {
        "display_name": "DDoS Protection",
        "short": "Mitigate DDoS attacks",
        "medium": "Configure DDoS protection policies and infrastructure protection.",
        "requires_tier": "Enterprise",
        "category": "Security",
        "use_cases": [
            "Configure DDoS protection policies",
            "Monitor and analyze DDoS threats",
            "Configure infrastructure protection",
        ],
        "related_domains": ["network_security", "virtual"],
        "resource_types": ["infraprotect", "infraprotect_firewall_rule"],
    },
    "dns": {
        "display_name": "DNS",
        "short": "Manage DNS zones and load balancing",
        "medium": "Manage DNS zones, resource record sets, DNS load balancers and compliance policies.",
        "requires_tier": "Standard",
        "category": "Networking",
        "use_cases": [
            "Configure DNS load balancing",
            "Manage DNS zones and domains",
            "Configure DNS compliance policies",
            "Manage resource record sets (RRSets)",
        ],
        "related_domains": ["virtual", "network"],
        "workflows": ["Create DNS Domain"],
        "resource_types": ["dns_zone", "dns_domain", "dns_load_balancer", "dns_lb_pool"],
    },
    "virtual": {
        "display_name": "Virtual",
        "short": "Manage load balancers and origin pools",
        "medium": "Configure HTTP/TCP/UDP load balancers, origin pools, health checks and routing.",
        "requires_tier": "Professional",
        "category": "Networking",
        "use_cases": [
            "Configure HTTP/TCP/UDP load balancers",
            "Manage origin pools and services",
            "Configure virtual hosts and routing",
            "Define rate limiter and service policies",
            "Manage geo-location-based routing",
            "Configure proxy and forwarding policies",
            "Manage malware protection and threat campaigns",
            "Configure health checks and endpoint monitoring",
        ],
        "related_domains": ["dns", "rate_limiting", "network"],
        "workflows": ["Create HTTP Load Balancer"],
        "resource_types": [
            "http_loadbalancer",
            "tcp_loadbalancer",
            "udp_loadbalancer",
            "origin_pool",
            "healthcheck",
            "service_policy",
        ],
    },
    "network": {
        "display_name": "Network",
        "short": "Configure routing and tunnels",
        "medium": "Configure BGP, IPsec tunnels, network connectors, SRv6 and IP prefix sets.",
        "requires_tier": "Professional",
        "category": "Networking",
        "use_cases": [
            "Configure BGP routing and ASN management",
            "Manage IPsec tunnels and IKE phases",
            "Configure network connectors and routes",
            "Manage SRv6 and subnetting",
            "Define segment connections and policies",
            "Configure IP prefix sets",
        ],
        "related_domains": ["virtual", "network_security", "dns"],
        "resource_types": ["bgp", "ike_phase1_profile", "network_connector", "ip_prefix_set", "route"],
    },
    "cdn": {
        "display_name": "CDN",
        "short": "Deliver content through the CDN",
        "medium": "Configure CDN load balancers, caching policies and content distribution.",
        "requires_tier": "Professional",
        "category": "Networking",
        "use_cases": [
            "Configure CDN load balancing",
            "Manage content delivery network services",
            "Configure caching policies",
            "Manage data delivery and distribution",
        ],
        "related_domains": ["virtual"],
        "resource_types": ["cdn_loadbalancer", "cdn_cache_rule"],
    },
    # Operations & Monitoring
    "observability": {
        "display_name": "Observability",
        "short": "Configure synthetic monitoring",
        "medium": "Define synthetic monitors, monitoring policies and observability dashboards.",
        "requires_tier": "Standard",
        "category": "Operations",
        "use_cases": [
            "Configure synthetic monitoring",
            "Define monitoring and testing policies",
            "Manage observability dashboards",
        ],
        "related_domains": ["statistics", "support"],
        "resource_types": ["v1_http_monitor", "v1_dns_monitor"],
    },
    "statistics": {
        "display_name": "Statistics",
        "short": "Inspect flows, alerts and logs",
        "medium": "Access flow statistics, alerts, log receivers, reports, topology and site status.",
        "requires_tier": "Standard",
        "category": "Operations",
        "use_cases": [
            "Access flow statistics and analytics",
            "Manage alerts and alerting policies",
            "View logs and log receivers",
            "Generate reports and graphs",
            "Track topology and service discovery",
            "Monitor status at sites",
        ],
        "related_domains": ["observability", "support"],
        "resource_types": ["alert_policy", "alert_receiver", "global_log_receiver", "report_config"],
    },
    "support": {
        "display_name": "Support",
        "short": "Manage support tickets",
        "medium": "Submit and track customer support tickets and requests.",
        "requires_tier": "Standard",
        "category": "Operations",
        "use_cases": [
            "Submit and manage support tickets",
            "Track customer support requests",
            "Access operational support documentation",
        ],
        "related_domains": ["statistics", "observability"],
        "resource_types": [("customer_support", "web")],
    },
    # System & Management
    "authentication": {
        "display_name": "Authentication",
        "short": "Configure identity providers",
        "medium": "Configure OIDC/OAuth providers, SCIM provisioning, API credentials and signup policies.",
        "requires_tier": "Standard",
        "category": "Platform",
        "use_cases": [
            "Configure authentication mechanisms",
            "Manage OIDC and OAuth providers",
            "Configure SCIM user provisioning",
            "Manage API credentials and access",
            "Configure account signup policies",
        ],
        "related_domains": ["system", "users"],
        "resource_types": [("oidc_provider", "web"), ("api_credential", "web")],
    },
    "system": {
        "display_name": "System",
        "short": "Manage tenant and namespaces",
        "medium": "Manage tenant configuration, RBAC roles, namespaces, contacts and user groups.",
        "requires_tier": "Standard",
        "category": "Platform",
        "use_cases": [
            "Manage tenant configuration",
            "Define RBAC policies and roles",
            "Manage namespaces and contacts",
            "Manage user accounts and groups",
            "Configure core system settings",
        ],
        "related_domains": ["authentication", "users", "admin"],
        "workflows": ["Create Tenant Namespace"],
        "resource_types": [("namespace", "web"), ("role", "web"), ("contact", "web"), ("user_group", "web")],
    },
    "users": {
        "display_name": "Users",
        "short": "Manage user accounts",
        "medium": "Manage user accounts, tokens, identification, settings and labels.",
        "requires_tier": "Standard",
        "category": "Platform",
        "use_cases": [
            "Manage user accounts and tokens",
            "Configure user identification",
            "Manage user settings and preferences",
            "Configure implicit and known labels",
        ],
        "related_domains": ["system", "admin"],
        "resource_types": [("user", "web"), ("user_identification", "config"), ("token", "web")],
    },
    # Platform & Integrations
    "bigip": {
        "display_name": "BIG-IP",
        "short": "Manage BIG-IP appliances",
        "medium": "Manage BIG-IP appliances, iRules, data groups and CNE integrations.",
        "requires_tier": "Enterprise",
        "category": "Platform",
        "use_cases": [
            "Manage BigIP F5 appliances",
            "Configure iRule scripts",
            "Manage data groups",
            "Integrate BigIP CNE",
        ],
        "related_domains": ["marketplace"],
        "resource_types": ["bigip_irule", "data_group", "bigip_virtual_server"],
    },
    "marketplace": {
        "display_name": "Marketplace",
        "short": "Manage integrations and add-ons",
        "medium": "Access third-party integrations, marketplace extensions and Terraform integrations.",
        "requires_tier": "Professional",
        "category": "Platform",
        "use_cases": [
            "Access third-party integrations and add-ons",
            "Manage marketplace extensions",
            "Configure Terraform and external integrations",
            "Manage TPM policies",
        ],
        "related_domains": ["bigip", "admin"],
        "resource_types": ["terraform_parameters", "tpm_api_key", "addon_subscription"],
    },
    "nginx_one": {
        "display_name": "NGINX One",
        "short": "Manage NGINX One integrations",
        "medium": "Manage NGINX One platform integrations and NGINX Plus instances.",
        "requires_tier": "Enterprise",
        "category": "Platform",
        "use_cases": [
            "Manage NGINX One platform integrations",
            "Configure NGINX Plus instances",
            "Integrate NGINX configuration management",
        ],
        "related_domains": ["marketplace"],
        "resource_types": ["nginx_instance", "nginx_server", "nginx_service_discovery"],
    },
    # Advanced & Emerging
    "certificates": {
        "display_name": "Certificates",
        "short": "Manage TLS certificates",
        "medium": "Manage SSL/TLS certificates, trusted CAs, revocation lists and manifests.",
        "requires_tier": "Standard",
        "category": "Security",
        "use_cases": [
            "Manage SSL/TLS certificates",
            "Configure trusted CAs",
            "Manage certificate revocation lists (CRL)",
            "Configure certificate manifests",
        ],
        "related_domains": ["blindfold", "system"],
        "resource_types": ["certificate", "certificate_chain", "trusted_ca_list", "crl"],
    },
    "generative_ai": {
        "display_name": "Generative AI",
        "short": "Configure AI-powered features",
        "medium": "Configure AI assistant policies, flow anomaly detection and AI data collection.",
        "requires_tier": "Professional",
        "is_preview": True,
        "category": "AI",
        "use_cases": [
            "Access AI-powered features",
            "Configure AI assistant policies",
            "Enable flow anomaly detection",
            "Manage AI data collection",
        ],
        "resource_types": ["ai_assistant_policy", "ai_data_collection"],
    },
    "object_storage": {
        "display_name": "Object Storage",
        "short": "Manage stored objects",
        "medium": "Manage object storage services, buckets and storage policies.",
        "requires_tier": "Professional",
        "category": "Platform",
        "use_cases": [
            "Manage object storage services",
            "Configure stored objects and buckets",
            "Manage storage policies",
        ],
        "related_domains": ["marketplace"],
        "resource_types": ["stored_object", "bucket"],
    },
    "rate_limiting": {
        "display_name": "Rate Limiting",
        "short": "Configure rate limiters",
        "medium": "Configure rate limiter policies, policers and traffic queuing.",
        "requires_tier": "Professional",
        "category": "Networking",
        "use_cases": [
            "Configure rate limiter policies",
            "Manage policer configurations",
            "Control traffic flow and queuing",
        ],
        "related_domains": ["virtual", "network_security"],
        "resource_types": ["rate_limiter", "rate_limiter_policy", "policer"],
    },
    "shape": {
        "display_name": "Shape Security",
        "short": "Configure Shape Security",
        "medium": "Configure Shape Security and SafeAP policies and threat recognition.",
        "requires_tier": "Enterprise",
        "is_preview": True,
        "category": "Security",
        "use_cases": [
            "Configure Shape Security policies",
            "Manage bot and threat prevention",
            "Configure SafeAP policies",
            "Enable threat recognition",
        ],
        "related_domains": ["bot_defense", "waf"],
        "resource_types": ["safeap_policy", "shape_recognize"],
    },
    # UI & Platform Infrastructure
    "admin": {
        "display_name": "Admin",
        "short": "Configure the administration console",
        "medium": "Configure console navigation tiles and static UI components.",
        "requires_tier": "Standard",
        "category": "Platform",
        "use_cases": [
            "Configure administration console",
            "Manage navigation tiles and UI elements",
            "Configure static UI components",
        ],
        "related_domains": ["system", "users"],
        "resource_types": [("navigation_tile", "web"), ("static_component", "web")],
    },
    "billing": {
        "display_name": "Billing",
        "short": "Manage billing and plans",
        "medium": "Manage subscriptions, payment methods, invoices, plan transitions and quota usage.",
        "requires_tier": "Standard",
        "category": "Platform",
        "use_cases": [
            "Manage billing and subscription",
            "Configure payment methods",
            "Track usage and invoices",
            "Manage plan transitions",
            "Monitor quota usage",
        ],
        "related_domains": ["system", "users"],
        "resource_types": [("payment_method", "web"), ("invoice", "web"), ("plan_transition", "web")],
    },
    "label": {
        "display_name": "Label",
        "short": "Manage resource labels",
        "medium": "Manage resource labels, label policies and compliance tagging.",
        "requires_tier": "Standard",
        "category": "Platform",
        "use_cases": [
            "Manage resource labels and tagging",
            "Configure label policies",
            "Enable compliance tracking",
        ],
        "related_domains": ["system"],
        "resource_types": ["known_label", "known_label_key", "implicit_label"],
    },
    "data_intelligence": {
        "display_name": "Data Intelligence",
        "short": "Analyze security and traffic data",
        "medium": "Analyze security and traffic data and derive insights from logs.",
        "requires_tier": "Standard",
        "category": "Operations",
        "use_cases": [
            "Analyze security and traffic data",
            "Generate intelligent insights from logs",
            "Configure data analytics policies",
        ],
        "related_domains": ["statistics", "observability"],
        "resource_types": ["di_policy"],
    },
    "telemetry_and_insights": {
        "display_name": "Telemetry and Insights",
        "short": "Collect telemetry",
        "medium": "Collect and analyze telemetry data and configure collection policies.",
        "requires_tier": "Standard",
        "category": "Operations",
        "use_cases": [
            "Collect and analyze telemetry data",
            "Generate actionable insights from metrics",
            "Configure telemetry collection policies",
        ],
        "related_domains": ["observability", "statistics"],
        "resource_types": ["telemetry_policy"],
    },
    "threat_campaign": {
        "display_name": "Threat Campaign",
        "short": "Track threat campaigns",
        "medium": "Track and analyze threat campaigns and attack patterns.",
        "requires_tier": "Standard",
        "category": "Security",
        "use_cases": [
            "Track and analyze threat campaigns",
            "Monitor active threats and attack patterns",
            "Configure threat intelligence integration",
        ],
        "related_domains": ["bot_defense", "ddos"],
        "resource_types": ["threat_campaign"],
    },
    "vpm_and_node_management": {
        "display_name": "VPM and Node Management",
        "short": "Manage VPM and node lifecycle",
        "medium": "Manage Virtual Private Mesh configuration and node lifecycle.",
        "requires_tier": "Standard",
        "category": "Platform",
        "use_cases": [
            "Manage Virtual Private Mesh (VPM) configuration",
            "Configure node lifecycle and management",
            "Monitor VPM and node status",
        ],
        "related_domains": ["site", "system"],
        "resource_types": ["vpm_config", "node"],
    },
    # CLI-only domains
    "login": {
        "display_name": "Login",
        "short": "Inspect authentication and connection state",
        "medium": "Show the configured API endpoint, authentication state, token validation and tier.",
        "requires_tier": "Standard",
        "category": "Platform",
        "use_cases": ["Verify session state", "Display environment banners"],
        "related_domains": [("context", 0.8)],
        "cli_only": True,
    },
    "context": {
        "display_name": "Context",
        "short": "Set default namespace for scoped command execution",
        "medium": (
            "Configure, display, and switch the active namespace scope. Commands "
            "automatically target this namespace when no explicit --namespace flag is provided."
        ),
        "requires_tier": "Standard",
        "category": "Platform",
        "use_cases": ["Manage namespaces and contacts", "Switch active namespace"],
        "related_domains": [("login", 0.8), ("system", 0.5)],
        "cli_only": True,
    },
    "subscription": {
        "display_name": "Subscription",
        "short": "Inspect subscription tier, addons and quotas",
        "medium": "Show the subscription tier and plan, addon services, quota usage and pre-deployment validation.",
        "requires_tier": "Standard",
        "category": "Platform",
        "use_cases": [
            "Manage billing and subscription",
            "Monitor quota usage",
            "Validate deployments against quota limits",
        ],
        "related_domains": [("billing", 0.9)],
        "cli_only": True,
    },
    "ai_services": {
        "display_name": "AI Services",
        "short": "Query and chat with the AI assistant",
        "medium": "Ask single questions or start an interactive multi-turn chat with the AI assistant.",
        "requires_tier": "Professional",
        "is_preview": True,
        "category": "AI",
        "use_cases": ["Access AI-powered features", "Configure AI assistant policies"],
        "related_domains": [("generative_ai", 1.0)],
        "cli_only": True,
    },
    "cloudstatus": {
        "display_name": "Cloud Status",
        "short": "Check platform status and active incidents",
        "medium": (
            "Query operational health, view active incidents, track scheduled maintenance "
            "windows, and verify component availability across deployment regions."
        ),
        "requires_tier": "Standard",
        "category": "Operations",
        "use_cases": [
            "Check platform health before deployments",
            "Track incidents and maintenance windows",
        ],
        "related_domains": [("observability", 0.6)],
        "cli_only": True,
    },
}

# Old domain names kept working after upstream renames (old -> new).
DEPRECATED_DOMAINS: dict[str, str] = {
    "security": "waf",
    "app_firewall": "waf",
    "load_balancer": "virtual",
    "loadbalancer": "virtual",
    "apisec": "api",
    "tenant": "system",
}
