"""Infrastructure, CI/CD pipelines and deployment configuration."""

from __future__ import annotations

from typing import Any, Mapping

from ..models import Choice, Question, TemplateDefinition
from ._common import ASSETS, FOOTER, FRONTMATTER, RESOURCES, answer

QUESTIONS = [
    Question(
        name="containerization",
        message="Containerization?",
        type="select",
        choices=(
            Choice("Docker", "docker", "Industry standard containers"),
            Choice("Podman", "podman", "Daemonless, rootless alternative"),
            Choice("None", "none", "No containerization"),
        ),
        default="docker",
    ),
    Question(
        name="orchestration",
        message="Orchestration?",
        type="select",
        choices=(
            Choice("Kubernetes", "kubernetes", "Full orchestration platform"),
            Choice("Docker Compose", "docker-compose", "Multi-container dev setup"),
            Choice("None", "none", "No orchestration"),
        ),
        default="docker-compose",
    ),
    Question(
        name="cicd",
        message="CI/CD platform?",
        type="select",
        choices=(
            Choice("GitHub Actions", "github-actions", "GitHub native CI/CD"),
            Choice("GitLab CI", "gitlab-ci", "GitLab native pipelines"),
            Choice("Jenkins", "jenkins", "Self-hosted, extensible"),
            Choice("None", "none", "No CI/CD"),
        ),
        default="github-actions",
    ),
    Question(
        name="cloud",
        message="Cloud provider?",
        type="select",
        choices=(
            Choice("AWS", "aws", "Amazon Web Services"),
            Choice("GCP", "gcp", "Google Cloud Platform"),
            Choice("Azure", "azure", "Microsoft Azure"),
            Choice("None / Self-hosted", "none", "On-premise or agnostic"),
        ),
        default="aws",
    ),
    Question(
        name="iac",
        message="Infrastructure as Code?",
        type="select",
        choices=(
            Choice("Terraform", "terraform", "Multi-cloud, declarative"),
            Choice("Pulumi", "pulumi", "Programming language IaC"),
            Choice("CloudFormation", "cloudformation", "AWS native IaC"),
            Choice("None", "none", "Manual provisioning"),
        ),
        default="terraform",
        when=lambda answers: answers.get("cloud") != "none",
    ),
    Question(
        name="monitoring",
        message="Monitoring?",
        type="select",
        choices=(
            Choice(
                "Prometheus + Grafana",
                "prometheus-grafana",
                "Open source metrics and dashboards",
            ),
            Choice("Datadog", "datadog", "Full-stack observability SaaS"),
            Choice("Cloud-native", "cloud-native", "CloudWatch / Stackdriver / Monitor"),
            Choice("None", "none", "No monitoring setup"),
        ),
        default="prometheus-grafana",
    ),
]

_CLOUD_LABELS = {
    "aws": "Amazon Web Services (AWS)",
    "gcp": "Google Cloud Platform (GCP)",
    "azure": "Microsoft Azure",
    "none": "Self-hosted / On-premise",
}
_CONTAINER_INSTALL = {
    "docker": "# Install Docker: https://docs.docker.com/get-docker/",
    "podman": "# Install Podman: https://podman.io/getting-started/installation",
}
_IAC_INSTALL = {
    "terraform": "# Install Terraform: https://developer.hashicorp.com/terraform/install",
    "pulumi": "# Install Pulumi: https://www.pulumi.com/docs/install/",
    "cloudformation": "# Install AWS CLI: https://aws.amazon.com/cli/",
}


def cloud_provider(answers: Mapping[str, Any]) -> str:
    return _CLOUD_LABELS.get(str(answers.get("cloud")), "Not specified")


def deployment_strategy(answers: Mapping[str, Any]) -> str:
    orchestration = answers.get("orchestration")
    if orchestration == "kubernetes":
        return "Rolling update with Kubernetes deployments"
    if orchestration == "docker-compose":
        return "Docker Compose up/down with health checks"
    return "Direct deployment to host"


def install_command(answers: Mapping[str, Any]) -> str:
    commands = [
        _CONTAINER_INSTALL.get(answer(answers, "containerization", "docker")),
        _IAC_INSTALL.get(answer(answers, "iac", "terraform")),
    ]
    return "\n".join(command for command in commands if command)


SKILL_MD = (
    FRONTMATTER
    + """
{{description}}

| Concern | Choice |
|---------|--------|
| Cloud | {{cloudProvider}} |
| Containers | {{containerization}} |
| Orchestration | {{orchestration}} |
| CI/CD | {{cicd}} |
{{#if iac}}| IaC | {{iac}} |
{{/if}}| Monitoring | {{monitoring}} |

## Tooling

```bash
{{installCommand}}
```

## Deployment

{{deploymentStrategy}}.

{{#if orchestration === 'kubernetes'}}```bash
kubectl apply -f k8s/
kubectl rollout status deployment/{{name}}
```
{{/if}}{{#if orchestration === 'docker-compose'}}```bash
docker compose up -d --build
docker compose ps
```
{{/if}}
{{#if cicd !== 'none'}}## Pipeline

{{#if cicd === 'github-actions'}}Workflows live in `.github/workflows/`.
{{/if}}{{#if cicd === 'gitlab-ci'}}The pipeline is defined in `.gitlab-ci.yml`.
{{/if}}{{#if cicd === 'jenkins'}}The pipeline is defined in `Jenkinsfile`.
{{/if}}Stages: lint, test, build, deploy. Deploys run only from the main branch.

{{/if}}{{#if iac === 'terraform'}}## Terraform

```bash
terraform init
terraform plan -out tfplan
terraform apply tfplan
```

{{/if}}{{#if monitoring !== 'none'}}## Monitoring

Every service exposes health and metrics endpoints scraped by {{monitoring}}.

{{/if}}"""
    + RESOURCES
    + FOOTER
)

RUNBOOK_MD = """# Runbook

## Rollback

{{#if orchestration === 'kubernetes'}}```bash
kubectl rollout undo deployment/{{name}}
```
{{/if}}{{#if orchestration !== 'kubernetes'}}Redeploy the previous image tag and confirm the health check passes.
{{/if}}
## Incident checklist

1. Confirm the alert in {{monitoring}}.
2. Check the latest deployment in {{cicd}}.
3. Roll back if the failure started with that deployment.
"""

CHECK_SCRIPT = """#!/usr/bin/env bash
# Health check helper for {{name}}
set -euo pipefail

URL="${1:-http://localhost:3000/health}"
curl -fsS "$URL" && echo " OK"
"""

TEMPLATE = TemplateDefinition(
    id="devops",
    name="DevOps / Infrastructure",
    description="Infrastructure, CI/CD pipelines, and deployment configurations",
    questions=QUESTIONS,
    variables={
        "cloudProvider": cloud_provider,
        "deploymentStrategy": deployment_strategy,
        "installCommand": install_command,
        "descriptionSuffix": lambda answers: (
            f"Targets {cloud_provider(answers)}. Use when changing infrastructure or pipelines."
        ),
    },
    content={
        "SKILL.md": SKILL_MD,
        "references/": {"RUNBOOK.md": RUNBOOK_MD},
        "scripts/": {"check-health.sh": CHECK_SCRIPT},
        "assets/": ASSETS,
    },
)
