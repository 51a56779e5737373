"""
tests/core/inventory/test_inventory_moto.py - moto 기반 EC2/CloudFormation 수집 통합 테스트
"""

import json

from core.inventory import Ec2Inventory, StackInventory


class TestEc2InventoryMoto:
    """moto EC2로 실제 API 형식 응답 수집"""

    def test_scoped_vpc_tree(self, moto_ec2):
        """지정 VPC의 리소스만 수집/연관"""
        ec2, vpc_id, subnet_id = moto_ec2
        igw_id = ec2.create_internet_gateway()["InternetGateway"]["InternetGatewayId"]
        ec2.attach_internet_gateway(InternetGatewayId=igw_id, VpcId=vpc_id)

        inventory = Ec2Inventory(ec2, vpc_ids=[vpc_id])
        inventory.collect_vpcs()
        inventory.collect()

        assert inventory.vpc_ids == [vpc_id]
        assert [s.subnet_id for s in inventory.subnets_in(vpc_id)] == [subnet_id]
        assert [g.internet_gateway_id for g in inventory.internet_gateways_in(vpc_id)] == [igw_id]
        # VPC 생성 시 기본 Route Table / Network ACL / Security Group이 함께 생성됨
        assert inventory.route_tables_in(vpc_id)
        assert inventory.network_acls_in(vpc_id)
        assert any(sg.is_default for sg in inventory.security_groups_in(vpc_id))
        # 범위 내 VPN Gateway가 없으므로 VPN Connection도 없음
        assert inventory.vpn_connections == []

        tree = inventory.trees()[0]
        assert tree.label == f"{vpc_id} (test-vpc)"
        assert tree.child("Subnets").children[0].label == f"{subnet_id} (test-subnet)"
        assert tree.child("Internet Gateways").children[0].label == igw_id

    def test_other_vpc_excluded(self, moto_ec2):
        """다른 VPC의 리소스는 범위 밖"""
        ec2, vpc_id, _subnet_id = moto_ec2
        other_vpc_id = ec2.create_vpc(CidrBlock="10.1.0.0/16")["Vpc"]["VpcId"]
        ec2.create_subnet(VpcId=other_vpc_id, CidrBlock="10.1.1.0/24")

        inventory = Ec2Inventory(ec2, vpc_ids=[vpc_id])
        inventory.collect_vpcs()
        inventory.collect()

        assert {s.vpc_id for s in inventory.subnets} == {vpc_id}
        assert inventory.subnets_in(other_vpc_id) == []

    def test_tag_tree(self, moto_ec2):
        """태그 그룹 모드"""
        ec2, vpc_id, subnet_id = moto_ec2

        inventory = Ec2Inventory(ec2, vpc_ids=[vpc_id], tags=[("Env", "prod")])
        inventory.collect_vpcs()
        inventory.collect()
        inventory.collect_tags()

        lines = inventory.trees()[0].to_lines()
        assert lines[0] == "Tags"
        assert lines[1] == "└── Env"
        assert lines[2] == "    └── prod"
        assert any(line.endswith(subnet_id) for line in lines)
        assert any(line.endswith(vpc_id) for line in lines)

    def test_unknown_vpc_id_collects_nothing(self, moto_ec2):
        """존재하지 않는 VPC ID는 리전 전체가 아니라 빈 범위"""
        ec2, _vpc_id, subnet_id = moto_ec2

        inventory = Ec2Inventory(ec2, vpc_ids=["vpc-doesnotexist0"], tags=[("Env", "prod")])
        inventory.collect_vpcs()
        inventory.collect()
        inventory.collect_tags()

        assert inventory.vpcs == []
        assert inventory.subnets == []
        assert subnet_id not in inventory.known_resource_ids()
        assert inventory.tag_descriptions == []
        assert inventory.trees() == []


def _template(logical_id, queue_name):
    return json.dumps(
        {
            "AWSTemplateFormatVersion": "2010-09-09",
            "Resources": {logical_id: {"Type": "AWS::SQS::Queue", "Properties": {"QueueName": queue_name}}},
        }
    )


class TestStackInventoryMoto:
    """moto CloudFormation 수집"""

    def test_stack_tree(self, moto_cloudformation):
        cf = moto_cloudformation
        cf.create_stack(StackName="web", TemplateBody=_template("Queue", "aware-web-queue"))
        cf.create_stack(StackName="api", TemplateBody=_template("ApiQueue", "aware-api-queue"))

        inventory = StackInventory(cf, stack_names=["web"])
        inventory.collect_stacks()
        inventory.collect_stack_resources()

        trees = inventory.trees()
        assert len(trees) == 1
        assert trees[0].label.startswith("web (")
        assert trees[0].children[0].label.startswith("AWS::SQS::Queue: ")
        assert "(Queue)" in trees[0].children[0].label
